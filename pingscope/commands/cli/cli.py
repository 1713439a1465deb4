import asyncio
import sys

from .command import Command, CommandCall, create_command


class CLI:
    _entrypoint: Command | None = None

    @classmethod
    async def run(cls, args: list[str] | None = None) -> int:
        if args is None:
            args = sys.argv[1:]

        if cls._entrypoint is None:
            raise RuntimeError("Err. - no root command registered")

        result, errors = await cls._entrypoint.run(args)

        if len(errors) > 0:
            return 1

        if isinstance(result, int):
            return result

        return 0

    @classmethod
    def root(
        cls,
        *commands: Command,
        shortnames: dict[str, str] | None = None,
        name: str | None = None,
    ):
        def wrap(command_call: CommandCall):
            cls._entrypoint = create_command(
                command_call,
                shortnames=shortnames,
                name=name,
            )

            for command in commands:
                cls._entrypoint.subcommands[command.command_name] = command

            return cls._entrypoint

        return wrap

    @classmethod
    def command(
        cls,
        shortnames: dict[str, str] | None = None,
        name: str | None = None,
    ):
        def wrap(command_call: CommandCall):
            return create_command(
                command_call,
                shortnames=shortnames,
                name=name,
            )

        return wrap


def run_cli(args: list[str] | None = None) -> int:
    try:
        return asyncio.run(CLI.run(args))

    except KeyboardInterrupt:
        return 130
