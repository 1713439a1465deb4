import math
from typing import Mapping

from pingscope.core.series import Series

from .summary_table_config import SummaryTableConfig


class SummaryTable:
    """
    One header row plus one row per target, in display order. The target
    name carries the target's palette colour so the table doubles as the
    chart legend.
    """

    def __init__(self, config: SummaryTableConfig) -> None:
        self._config = config

    def fit(self, max_width: int) -> tuple[int, list[int]]:
        """
        Split ``max_width`` between the target column and the metric
        columns by weight, dropping trailing metric columns that would fall
        below the minimum column width.
        """
        headers = list(self._config.headers)
        weight = self._config.target_column_weight

        while len(headers) > 0:
            share = int(math.floor(max_width / (weight + len(headers))))
            if share >= self._config.minimum_column_width:
                break

            headers.pop()

        shares = weight + len(headers)
        column_width = int(math.floor(max_width / shares))
        target_width = max_width - column_width * len(headers)

        return target_width, [column_width] * len(headers)

    def render(
        self,
        series_by_target: Mapping[str, Series],
        color_by_target: Mapping[str, str],
        width: int,
        display_order: list[str],
        selected: str | None = None,
    ) -> list[str]:
        target_width, column_widths = self.fit(width)
        headers = self._config.headers[: len(column_widths)]

        header_color = self._config.header_color
        marker_width = len(self._config.selection_marker) + 1
        name_width = max(target_width - marker_width, 1)

        header_cells = [
            f"{'':<{marker_width}}{self._config.target_header:<{name_width}}"
        ]
        header_cells.extend(
            f"{header:>{column_width}}"
            for header, column_width in zip(headers, column_widths)
        )

        lines = [f"[{header_color}]{''.join(header_cells)}[white]"]

        for target in display_order:
            series = series_by_target.get(target)
            if series is None:
                continue

            marker = self._config.selection_marker if target == selected else ""
            color = color_by_target.get(target, "white")
            name = target[:name_width]

            row = [
                f"{marker:<{marker_width}}[{color}]{name:<{name_width}}[white]",
            ]

            for header, column_width in zip(headers, column_widths):
                value = series.summary.get(header) or self._config.default
                row.append(f"{value:>{column_width}}")

            lines.append("".join(row))

        return lines
