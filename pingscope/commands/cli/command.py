from __future__ import annotations

import asyncio
import sys
from typing import Any, Awaitable, Callable

from .help_message import create_help_string
from .inspect_wrapped import assemble_expanded_args, inspect_wrapped
from .keyword_arg import KeywordArg
from .positional_arg import PositionalArg

CommandCall = Callable[..., Awaitable[int | None]]


def create_command(
    command_call: CommandCall,
    shortnames: dict[str, str] | None = None,
    name: str | None = None,
):
    (
        description,
        positional_args_map,
        keyword_args_map,
    ) = inspect_wrapped(
        command_call,
        shortnames=shortnames,
    )

    return Command(
        name or command_call.__name__,
        command_call,
        description,
        positional_args=positional_args_map,
        keyword_args_map=keyword_args_map,
    )


class Command:
    def __init__(
        self,
        command: str,
        callable: CommandCall,
        description: str,
        positional_args: dict[int, PositionalArg] | None = None,
        keyword_args_map: dict[str, KeywordArg] | None = None,
    ):
        if positional_args is None:
            positional_args = {}

        if keyword_args_map is None:
            keyword_args_map = {}

        self.command_name = command
        self.description = description
        self._command_call = callable

        self.positional_args = positional_args
        self.keyword_args_map = keyword_args_map
        self.subcommands: dict[str, Command] = {}

    @property
    def keyword_args(self) -> list[KeywordArg]:
        unique: dict[str, KeywordArg] = {}
        for keyword_arg in self.keyword_args_map.values():
            unique.setdefault(keyword_arg.name, keyword_arg)

        return list(unique.values())

    @property
    def help_message(self):
        return create_help_string(
            self.command_name,
            self.description,
            list(self.positional_args.values()),
            self.keyword_args,
            subcommands={
                name: command.description
                for name, command in self.subcommands.items()
            },
        )

    async def run(self, args: list[str]) -> tuple[Any | None, list[str]]:
        if len(args) > 0 and (subcommand := self.subcommands.get(args[0])):
            return await subcommand.run(args[1:])

        (
            positional_args,
            keyword_args,
            errors,
        ) = self.find_args(args)

        if keyword_args.get("help"):
            await self._write(f"{self.help_message}\n")

            return 0, []

        if len(errors) > 0:
            await self._write(
                "\n".join([*errors, "", self.help_message]) + "\n",
                stream=sys.stderr,
            )

            return None, errors

        keyword_args.pop("help", None)

        result = await self._command_call(*positional_args, **keyword_args)

        return result, errors

    def find_args(self, args: list[str]):
        (
            positional_args,
            keyword_args,
            errors,
        ) = self._assemble_positional_and_keyword_args(args)

        if keyword_args.get("help"):
            return positional_args, keyword_args, []

        for idx, positional_arg in self.positional_args.items():
            if idx >= len(positional_args):
                errors.append(f"{positional_arg.name} argument is required")

        for keyword_arg in self.keyword_args:
            if keyword_arg.name in keyword_args:
                continue

            if keyword_arg.required:
                errors.append(f"{keyword_arg.full_flag} option is required")

            elif keyword_arg.arg_type == "flag":
                keyword_args[keyword_arg.name] = bool(keyword_arg.default)

            else:
                keyword_args[keyword_arg.name] = keyword_arg.default

        return positional_args, keyword_args, errors

    def _assemble_positional_and_keyword_args(
        self,
        args: list[str],
    ):
        positional_args: list[Any] = []
        keyword_args: dict[str, Any] = {}
        errors: list[str] = []

        cli_args = assemble_expanded_args(args)
        positional_idx = 0
        idx = 0

        while idx < len(cli_args):
            arg = cli_args[idx]

            if keyword_arg := self.keyword_args_map.get(arg):
                if keyword_arg.arg_type == "flag":
                    keyword_args[keyword_arg.name] = True
                    idx += 1
                    continue

                if idx + 1 >= len(cli_args):
                    errors.append(f"No value found for option {keyword_arg.full_flag}")
                    break

                value = keyword_arg.parse(cli_args[idx + 1])
                if isinstance(value, Exception):
                    errors.append(
                        f"{cli_args[idx + 1]} is not a valid value [{keyword_arg.data_type}] for option {keyword_arg.full_flag}"
                    )

                else:
                    keyword_args[keyword_arg.name] = value

                idx += 2
                continue

            if arg.startswith("-") and arg != "-":
                errors.append(f"{arg} is not a recognized option")
                idx += 1
                continue

            positional_arg = self.positional_args.get(positional_idx)
            if positional_arg is None:
                errors.append(f"{arg} is not a recognized argument or command")
                idx += 1
                continue

            value = positional_arg.parse(arg)
            if isinstance(value, Exception):
                errors.append(
                    f"{arg} is not a valid value [{positional_arg.data_type}] for argument {positional_arg.name}"
                )

            elif positional_arg.is_multiarg:
                if positional_idx >= len(positional_args):
                    positional_args.append([])

                positional_args[positional_idx].append(value)

            else:
                positional_args.append(value)
                positional_idx += 1

            idx += 1

        return positional_args, keyword_args, errors

    async def _write(self, text: str, stream=None):
        if stream is None:
            stream = sys.stdout

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, stream.write, text)
