"""
Tests for the terminal draw surface and key handling.
"""

import io
import signal

from pingscope.ui.components.terminal import (
    KEY_DOWN,
    KEY_UP,
    KeyReader,
    Terminal,
    TerminalConfig,
    split_keys,
)
from pingscope.ui.components.terminal.terminal import (
    CLEAR_SCREEN,
    HIDE_CURSOR,
    REPAINT,
    SHOW_CURSOR,
)


# =============================================================================
# Draw surface
# =============================================================================


class TestTerminal:
    """Test sizing, drawing and open/close."""

    def test_size_overrides(self) -> None:
        terminal = Terminal(TerminalConfig(width=120, height=40))

        assert terminal.size() == (120, 40)

    def test_partial_override_keeps_other_dimension(self) -> None:
        terminal = Terminal(TerminalConfig(width=120))

        width, height = terminal.size()

        assert width == 120
        assert height > 0

    async def test_draw_without_color(self) -> None:
        output = io.StringIO()
        terminal = Terminal(TerminalConfig(no_color=True), stream=output)

        await terminal.draw("[green]host-a[white] 10ms")

        written = output.getvalue()

        assert written.startswith(REPAINT)
        assert "host-a 10ms" in written
        assert "\033[32m" not in written

    async def test_draw_with_color(self) -> None:
        output = io.StringIO()
        terminal = Terminal(TerminalConfig(), stream=output)

        await terminal.draw("[green]host-a[white]")

        assert "\033[32mhost-a\033[97m" in output.getvalue()

    async def test_clear_draw(self) -> None:
        output = io.StringIO()
        terminal = Terminal(TerminalConfig(no_color=True), stream=output)

        await terminal.draw("frame", clear=True)

        assert output.getvalue().startswith(CLEAR_SCREEN)

    async def test_resize_forces_clear(self) -> None:
        output = io.StringIO()
        terminal = Terminal(TerminalConfig(no_color=True), stream=output)

        terminal._mark_resized()
        await terminal.draw("frame")

        assert output.getvalue().startswith(CLEAR_SCREEN)
        assert terminal.resized is False

    async def test_open_and_close(self) -> None:
        output = io.StringIO()
        terminal = Terminal(TerminalConfig(), stream=output)
        stops: list[bool] = []

        await terminal.open(on_stop=lambda: stops.append(True))

        assert signal.SIGINT in terminal._dfl_sigmap
        assert signal.SIGTERM in terminal._dfl_sigmap

        await terminal.close()

        written = output.getvalue()

        assert written.startswith(HIDE_CURSOR)
        assert SHOW_CURSOR in written
        assert terminal._dfl_sigmap == {}

    async def test_close_without_open_writes_nothing(self) -> None:
        output = io.StringIO()
        terminal = Terminal(TerminalConfig(), stream=output)

        await terminal.close()

        assert output.getvalue() == ""


# =============================================================================
# Keys
# =============================================================================


class TestKeyReader:
    """Test key splitting and dispatch."""

    def test_split_keys(self) -> None:
        assert split_keys(f"{KEY_UP}{KEY_DOWN}q") == [KEY_UP, KEY_DOWN, "q"]

    def test_dispatch_calls_bound_handlers(self) -> None:
        pressed: list[str] = []

        reader = KeyReader(
            {
                KEY_UP: lambda: pressed.append("up"),
                "q": lambda: pressed.append("quit"),
            }
        )

        handled = reader.dispatch(f"{KEY_UP}xq")

        assert handled == 2
        assert pressed == ["up", "quit"]

    def test_non_tty_stdin_is_left_alone(self) -> None:
        reader = KeyReader({}, stdin=io.StringIO())

        assert reader.start() is False
        assert reader.active is False

        reader.stop()
