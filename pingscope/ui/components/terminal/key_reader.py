import asyncio
import os
import sys
import termios
import tty
from typing import Any, Callable, TextIO

KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"

ESCAPE_SEQUENCE_LENGTH = 3
READ_SIZE = 64

KeyHandler = Callable[[], Any]


def split_keys(data: str) -> list[str]:
    """Split raw terminal input into single keys and arrow-key sequences."""
    keys: list[str] = []
    idx = 0

    while idx < len(data):
        if data.startswith("\x1b[", idx) and idx + ESCAPE_SEQUENCE_LENGTH <= len(data):
            keys.append(data[idx : idx + ESCAPE_SEQUENCE_LENGTH])
            idx += ESCAPE_SEQUENCE_LENGTH

        else:
            keys.append(data[idx])
            idx += 1

    return keys


class KeyReader:
    """
    Puts an interactive stdin into cbreak mode and dispatches key presses
    to handlers from the event loop. A non-tty stdin is left alone.
    """

    def __init__(
        self,
        bindings: dict[str, KeyHandler],
        stdin: TextIO | None = None,
    ) -> None:
        self.bindings = bindings

        self._stdin = stdin
        self._fd: int | None = None
        self._original_term: list[Any] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def stdin(self) -> TextIO:
        if self._stdin is None:
            return sys.stdin

        return self._stdin

    @property
    def active(self) -> bool:
        return self._fd is not None

    def start(self) -> bool:
        if not self.stdin.isatty():
            return False

        self._loop = asyncio.get_event_loop()
        self._fd = self.stdin.fileno()
        self._original_term = termios.tcgetattr(self._fd)

        tty.setcbreak(self._fd)
        self._loop.add_reader(self._fd, self._on_readable)

        return True

    def stop(self):
        if self._fd is None:
            return

        self._loop.remove_reader(self._fd)

        if self._original_term is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_term)

        self._fd = None
        self._original_term = None

    def dispatch(self, data: str) -> int:
        handled = 0

        for key in split_keys(data):
            if handler := self.bindings.get(key):
                handler()
                handled += 1

        return handled

    def _on_readable(self):
        data = os.read(self._fd, READ_SIZE)
        self.dispatch(data.decode(errors="ignore"))
