from .mode import (
    TerminalDisplayMode as TerminalDisplayMode,
    TerminalMode as TerminalMode,
)
