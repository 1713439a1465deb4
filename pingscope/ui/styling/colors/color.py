from __future__ import annotations

from enum import Enum
from typing import Dict, Literal

from pingscope.ui.config.mode import TerminalMode

ColorName = Literal[
    "black",
    "gray",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "light_red",
    "light_green",
    "light_yellow",
    "light_blue",
    "light_magenta",
    "light_cyan",
    "orange",
    "purple",
    "lime",
    "pink",
    "dark_cyan",
    "dark_green",
    "dark_blue",
    "dark_magenta",
]


class BaseColorType(Enum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GRAY = 90
    LIGHT_RED = 91
    LIGHT_GREEN = 92
    LIGHT_YELLOW = 93
    LIGHT_BLUE = 94
    LIGHT_MAGENTA = 95
    LIGHT_CYAN = 96
    WHITE = 97


class ExtendedColorType(Enum):
    BLACK = 0
    RED = 9
    GREEN = 2
    YELLOW = 11
    BLUE = 12
    MAGENTA = 13
    CYAN = 14
    GRAY = 244
    WHITE = 15
    LIGHT_RED = 203
    LIGHT_GREEN = 119
    LIGHT_YELLOW = 227
    LIGHT_BLUE = 75
    LIGHT_MAGENTA = 207
    LIGHT_CYAN = 123
    ORANGE = 208
    PURPLE = 93
    LIME = 10
    PINK = 218
    DARK_CYAN = 36
    DARK_GREEN = 22
    DARK_BLUE = 18
    DARK_MAGENTA = 90


# Closest 16-colour fallback for names only the 256-colour table knows.
COMPATIBILITY_FALLBACKS: Dict[str, str] = {
    "orange": "yellow",
    "purple": "magenta",
    "lime": "light_green",
    "pink": "light_magenta",
    "dark_cyan": "cyan",
    "dark_green": "green",
    "dark_blue": "blue",
    "dark_magenta": "magenta",
}


class Color:
    names: Dict[
        str,
        int,
    ] = {attr.name.lower(): attr.value for attr in BaseColorType}

    extended_names: Dict[
        str,
        int,
    ] = {attr.name.lower(): attr.value for attr in ExtendedColorType}

    def __contains__(self, color: str):
        return color in self.names or color in self.extended_names

    @classmethod
    def by_name(
        cls,
        color: ColorName | str,
        default: int | None = None,
        mode: TerminalMode = TerminalMode.COMPATIBILITY,
    ):
        if mode == TerminalMode.EXTENDED:
            return cls.extended_names.get(
                color, default if default else cls.extended_names.get("white")
            )

        color = COMPATIBILITY_FALLBACKS.get(color, color)

        return cls.names.get(color, default if default else cls.names.get("white"))

    @classmethod
    def is_known(cls, color: str):
        return color in cls.names or color in cls.extended_names
