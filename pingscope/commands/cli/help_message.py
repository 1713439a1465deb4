import re
import textwrap

from .keyword_arg import KeywordArg
from .positional_arg import PositionalArg

PARAM_PATTERN = re.compile(r"@param\s+(?P<name>\w+)\s+(?P<description>.+)")


def parse_docstring(docstring: str | None) -> tuple[str, dict[str, str]]:
    """
    Split a command docstring into its description and the ``@param``
    descriptions keyed by argument name.
    """
    if docstring is None:
        return "", {}

    description_lines: list[str] = []
    params: dict[str, str] = {}

    for line in textwrap.dedent(docstring).strip().splitlines():
        if match := PARAM_PATTERN.search(line):
            params[match.group("name")] = match.group("description").strip()

        elif line.strip():
            description_lines.append(line.strip())

    return " ".join(description_lines), params


def create_help_string(
    command_name: str,
    description: str,
    positional_args: list[PositionalArg],
    keyword_args: list[KeywordArg],
    subcommands: dict[str, str] | None = None,
    indentation: int = 3,
):
    indent = " " * indentation

    usage = " ".join(
        [
            command_name,
            "[options]",
            *[f"<{arg.name}>" for arg in positional_args],
        ]
    )

    lines = [f"usage: {usage}"]

    if description:
        lines.extend(["", f"{indent}{description}"])

    if subcommands:
        lines.extend(["", "commands:"])
        lines.extend(
            f"{indent}{name}: {command_description}"
            for name, command_description in subcommands.items()
        )

    if positional_args:
        lines.extend(["", "arguments:"])
        lines.extend(f"{indent}{arg.to_help_string()}" for arg in positional_args)

    if keyword_args:
        lines.extend(["", "options:"])
        lines.extend(f"{indent}{arg.to_help_string()}" for arg in keyword_args)

    return "\n".join(lines)
