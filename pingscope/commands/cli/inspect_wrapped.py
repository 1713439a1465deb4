import inspect
from types import UnionType
from typing import Any, Callable, get_args, get_origin

from .help_message import parse_docstring
from .keyword_arg import KeywordArg, KeywordArgType
from .positional_arg import PositionalArg


def assemble_expanded_args(args: list[str]):
    """Expand grouped short flags, so ``-6n`` becomes ``-6 -n``."""
    cli_args: list[str] = []

    for arg in args:
        if arg.startswith("--") or not arg.startswith("-") or arg == "-":
            cli_args.append(arg)

        else:
            cli_args.extend(f"-{short_arg}" for short_arg in arg.strip("-"))

    return cli_args


def inspect_wrapped(
    command_call: Callable[..., Any],
    shortnames: dict[str, str] | None = None,
):
    if shortnames is None:
        shortnames = {}

    call_args = inspect.signature(command_call, eval_str=True)
    description, param_descriptions = parse_docstring(command_call.__doc__)

    positional_args_map: dict[int, PositionalArg] = {}
    keyword_args_map: dict[str, KeywordArg] = {}

    position_index: int = 0

    for arg_name, arg_attrs in call_args.parameters.items():
        if arg_attrs.annotation is inspect.Parameter.empty:
            raise TypeError(
                f"Err. - cannot use unannotated arg {arg_name} for command signature"
            )

        if arg_attrs.default is inspect.Parameter.empty:
            positional_args_map[position_index] = PositionalArg(
                arg_name,
                position_index,
                arg_attrs.annotation,
                description=param_descriptions.get(arg_name),
            )

            position_index += 1
            continue

        arg_type: KeywordArgType = "keyword"
        if arg_attrs.annotation is bool:
            arg_type = "flag"

        args_types = [arg_attrs.annotation]
        if get_origin(arg_attrs.annotation) is UnionType:
            args_types = list(get_args(arg_attrs.annotation))

        required = arg_attrs.default is None and type(None) not in args_types

        keyword_arg = KeywordArg(
            arg_name,
            arg_attrs.annotation,
            short_name=shortnames.get(arg_name),
            required=required,
            default=arg_attrs.default,
            arg_type=arg_type,
            description=param_descriptions.get(arg_name),
        )

        for flag in keyword_arg.flags:
            keyword_args_map[flag] = keyword_arg

    help_arg = KeywordArg(
        "help",
        bool,
        short_name="h",
        default=False,
        required=False,
        description="Display the help message and exit.",
        arg_type="flag",
    )

    for flag in help_arg.flags:
        keyword_args_map[flag] = help_arg

    return (
        description,
        positional_args_map,
        keyword_args_map,
    )
