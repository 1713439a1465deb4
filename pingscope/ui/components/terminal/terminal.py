from __future__ import annotations

import asyncio
import shutil
import signal
import sys
from typing import (
    Any,
    Callable,
    Dict,
    TextIO,
)

from pingscope.ui.config.mode import TerminalMode
from pingscope.ui.styling import can_do_colour, stylize_markup

from .terminal_config import TerminalConfig

SignalHandlers = Callable[[int], Any] | int | None

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CLEAR_SCREEN = "\033[2J\033[H"
REPAINT = "\033[3J\033[H"
CLEAR_TO_END = "\033[J"

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Terminal:
    """
    Full-screen draw surface. Each ``draw`` repaints the screen from the
    home position with the given markup text converted to ANSI colour.
    """

    def __init__(
        self,
        config: TerminalConfig | None = None,
        stream: TextIO | None = None,
    ) -> None:
        if config is None:
            config = TerminalConfig()

        self.config = config
        self.mode = TerminalMode.to_mode(config.terminal_mode)
        self.use_color = not config.no_color

        self._stream = stream
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stdout_lock: asyncio.Lock | None = None
        self._opened = False
        self._resized = False

        # Maps signals to the handlers in place before ``open`` so
        # ``close`` can restore them.
        self._dfl_sigmap: Dict[signal.Signals, SignalHandlers] = {}

    @property
    def stream(self) -> TextIO:
        if self._stream is None:
            return sys.stdout

        return self._stream

    @property
    def resized(self) -> bool:
        return self._resized

    def size(self) -> tuple[int, int]:
        width = self.config.width
        height = self.config.height

        if width is None or height is None:
            terminal_size = shutil.get_terminal_size()

            if width is None:
                width = terminal_size.columns

            if height is None:
                height = terminal_size.lines

        return width, height

    async def open(
        self,
        on_stop: Callable[[], Any] | None = None,
    ):
        self._loop = asyncio.get_event_loop()

        if self._stdout_lock is None:
            self._stdout_lock = asyncio.Lock()

        if self.use_color:
            self.use_color = await can_do_colour(no_color=self.config.no_color)

        self._register_signal_handlers(on_stop)
        self._opened = True

        await self._write(HIDE_CURSOR + CLEAR_SCREEN)

    async def draw(
        self,
        text: str,
        clear: bool = False,
    ):
        frame = stylize_markup(
            text,
            mode=self.mode,
            use_color=self.use_color,
        )

        prefix = REPAINT
        if clear or self._resized:
            prefix = CLEAR_SCREEN
            self._resized = False

        await self._write(f"{prefix}{frame}{CLEAR_TO_END}")

    async def close(self):
        if not self._opened:
            return

        self._opened = False
        self._restore_signal_handlers()

        await self._write(SHOW_CURSOR + "\n")

    async def _write(self, text: str):
        if self._loop is None:
            self._loop = asyncio.get_event_loop()

        if self._stdout_lock is None:
            self._stdout_lock = asyncio.Lock()

        async with self._stdout_lock:
            await self._loop.run_in_executor(None, self._write_and_flush, text)

    def _write_and_flush(self, text: str):
        self.stream.write(text)
        self.stream.flush()

    def _mark_resized(self):
        self._resized = True

    def _register_signal_handlers(
        self,
        on_stop: Callable[[], Any] | None,
    ):
        if sys.platform == "win32":
            return

        handlers: list[tuple[signal.Signals, Callable[[], Any]]] = [
            (signal.SIGWINCH, self._mark_resized),
        ]

        if on_stop is not None:
            handlers.extend((signame, on_stop) for signame in STOP_SIGNALS)

        for signame, handler in handlers:
            self._dfl_sigmap[signame] = signal.getsignal(signame)
            self._loop.add_signal_handler(signame, handler)

    def _restore_signal_handlers(self):
        for signame, handler in self._dfl_sigmap.items():
            self._loop.remove_signal_handler(signame)

            if handler is not None:
                signal.signal(signame, handler)

        self._dfl_sigmap.clear()
