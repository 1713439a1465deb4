import time

from pingscope.core.series import SeriesStore
from pingscope.ui.components.chart import LatencyChart
from pingscope.ui.components.summary_table import SummaryTable
from pingscope.ui.components.terminal import Terminal
from pingscope.ui.styling.colors import TargetPalette

WAITING_HEADER = "pingscope started - connecting to targets..."
ALL_TARGETS_LABEL = "all targets"

# Header line plus the blank line between the table and the chart.
DECORATION_ROWS = 2


class Dashboard:
    """
    Composes the header, the summary table, and the latency chart into
    one frame. The table lists every target with data. The chart shows
    all of them or, after ``select_next`` or ``select_previous``, only the
    selected target, with its table row marked.
    """

    def __init__(
        self,
        targets: list[str],
        store: SeriesStore,
        chart: LatencyChart,
        table: SummaryTable,
        palette: TargetPalette,
        terminal: Terminal,
    ) -> None:
        self.targets = list(targets)
        self.store = store
        self.chart = chart
        self.table = table
        self.palette = palette
        self.terminal = terminal

        # None is the all-targets view.
        self._selected: str | None = None

    @property
    def selected(self) -> str | None:
        return self._selected

    def active_targets(self) -> list[str]:
        """Targets that have reported at least once, in target order."""
        return [target for target in self.targets if target in self.store]

    def select_next(self) -> str | None:
        """Step down through the targets with data, wrapping to the all-targets view."""
        active = self.active_targets()

        if len(active) == 0:
            self._selected = None

        elif self._selected is None or self._selected not in active:
            self._selected = active[0]

        elif self._selected == active[-1]:
            self._selected = None

        else:
            self._selected = active[active.index(self._selected) + 1]

        return self._selected

    def select_previous(self) -> str | None:
        active = self.active_targets()

        if len(active) == 0:
            self._selected = None

        elif self._selected is None or self._selected not in active:
            self._selected = active[-1]

        elif self._selected == active[0]:
            self._selected = None

        else:
            self._selected = active[active.index(self._selected) - 1]

        return self._selected

    def visible_targets(self) -> list[str]:
        """Targets drawn on the chart for the current view."""
        if self._selected is None:
            return self.active_targets()

        return [self._selected]

    def render_frame(
        self,
        width: int,
        height: int,
        now: float | None = None,
    ) -> str:
        if now is None:
            now = time.time()

        # The table always lists every target with data; only the chart
        # narrows to the selected target.
        snapshot = self.store.snapshot(self.targets)

        if len(snapshot) == 0:
            return WAITING_HEADER

        table_order = list(snapshot.keys())
        colors = self.palette.colors_for(table_order)

        visible = [target for target in self.visible_targets() if target in snapshot]

        view = ALL_TARGETS_LABEL if self._selected is None else self._selected
        header = f"pingscope - {len(self.targets)} target(s) - view: {view}"

        table_lines = self.table.render(
            snapshot,
            colors,
            width,
            table_order,
            selected=self._selected,
        )

        chart_height = height - len(table_lines) - DECORATION_ROWS

        chart = self.chart.render(
            {target: snapshot[target] for target in visible},
            colors,
            width,
            chart_height,
            display_order=visible,
            now=now,
        )

        return "\n".join([header, *table_lines, "", chart])

    async def refresh(self):
        width, height = self.terminal.size()
        await self.terminal.draw(self.render_frame(width, height))
