import asyncio
import os
import re
import sys

from pingscope.ui.config.mode import TerminalMode

from .colors.color import Color

RESET = "\033[0m"

MARKUP_PATTERN = re.compile(r"\[([a-z_]+)\]")


async def can_do_colour(
    *,
    no_color: bool | None = None,
    force_color: bool | None = None,
) -> bool:
    if no_color is not None and no_color:
        return False
    if force_color is not None and force_color:
        return True

    loop = asyncio.get_event_loop()

    return (
        hasattr(sys.stdout, "isatty")
        and await loop.run_in_executor(None, sys.stdout.isatty)
        and await loop.run_in_executor(None, os.environ.get, "TERM") != "dumb"
    )


def _to_ansi(
    color: str,
    mode: TerminalMode,
):
    if mode == TerminalMode.EXTENDED:
        return "\033[38;5;%dm" % Color.by_name(color, mode=mode)

    return "\033[%dm" % Color.by_name(color, mode=mode)


def stylize_markup(
    text: str,
    mode: TerminalMode = TerminalMode.COMPATIBILITY,
    use_color: bool = True,
) -> str:
    """
    Convert inline ``[colorname]`` markup to ANSI escape codes.

    Tags that are not colour names are left untouched so literal brackets
    in target names survive. With ``use_color`` off, colour tags are
    stripped instead.
    """

    def replace(match: re.Match[str]):
        color = match.group(1)
        if not Color.is_known(color):
            return match.group(0)

        if use_color is False:
            return ""

        return _to_ansi(color, mode)

    converted = MARKUP_PATTERN.sub(replace, text)

    if use_color and converted != text:
        converted += RESET

    return converted


def strip_markup(text: str) -> str:
    return stylize_markup(text, use_color=False)
