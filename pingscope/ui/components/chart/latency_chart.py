import datetime
import math
import time
from typing import Mapping

from pingscope.core.series import Series
from pingscope.core.stats import format_latency
from pingscope.core.window import OFF_LEFT_EDGE, OFF_RIGHT_EDGE, TimeWindow

from .braille_canvas import BrailleCanvas
from .chart_config import ChartConfig
from .value_range import ValueRange, compute_value_range

# Rows under the plot body: the axis rule and the time labels.
X_AXIS_ROWS = 2

# Separator allowance to the right of the Y-axis labels ("│" plus a space).
Y_AXIS_SEPARATOR_WIDTH = 2


class RenderMessage:
    TOO_SMALL = "terminal too small"
    TOO_LARGE = "terminal too large"
    NO_DATA = "no data"
    NO_DATA_IN_WINDOW = "no data in current window"
    AREA_TOO_SMALL = "drawable area too small"


class LatencyChart:
    """
    Renders target histories as a braille line chart with a dynamically
    scaled latency axis and a time axis taken from the ``TimeWindow``.

    The output is a single text block with inline ``[color]...[white]``
    markup, ready to be handed to the draw surface.
    """

    def __init__(
        self,
        config: ChartConfig,
        window: TimeWindow,
    ) -> None:
        self._config = config
        self._window = window

    @property
    def window(self):
        return self._window

    def validate_size(
        self,
        width: int,
        height: int,
    ) -> str | None:
        if height < self._config.min_chart_height or width < self._config.min_chart_width:
            return RenderMessage.TOO_SMALL

        if width > self._config.max_chart_size or height > self._config.max_chart_size:
            return RenderMessage.TOO_LARGE

        return None

    def render(
        self,
        series_by_target: Mapping[str, Series],
        color_by_target: Mapping[str, str],
        width: int,
        height: int,
        display_order: list[str],
        now: float | None = None,
    ) -> str:
        if size_error := self.validate_size(width, height):
            return size_error

        if len(series_by_target) == 0:
            return RenderMessage.NO_DATA

        if now is None:
            now = time.time()

        start, end = self._window.current_window(now)

        value_range = compute_value_range(
            series_by_target.values(),
            start,
            end,
            self._config.value_buffer_ratio,
            floor=self._config.value_floor,
        )

        if value_range is None:
            return RenderMessage.NO_DATA_IN_WINDOW

        label_width = (
            max(
                len(format_latency(value_range.maximum)),
                len(format_latency(value_range.minimum)),
            )
            + Y_AXIS_SEPARATOR_WIDTH
        )

        body_height = height - X_AXIS_ROWS
        chart_width = width - label_width

        if body_height <= 0 or chart_width <= 0:
            return RenderMessage.AREA_TOO_SMALL

        canvas = BrailleCanvas(chart_width, body_height)

        for target in display_order:
            series = series_by_target.get(target)
            if series is None or len(series.history) == 0:
                continue

            color = color_by_target.get(target, self._config.default_line_color)

            self._draw_series(
                canvas,
                series,
                color,
                value_range,
                start,
                end,
            )

        lines = self._render_body(
            canvas,
            value_range,
            label_width,
        )

        lines.extend(
            self._render_time_axis(
                start,
                end,
                label_width,
                chart_width,
            )
        )

        if len(lines) > height:
            lines = lines[:height]

        return "\n".join(lines)

    def _draw_series(
        self,
        canvas: BrailleCanvas,
        series: Series,
        color: str,
        value_range: ValueRange,
        start: float,
        end: float,
    ):
        last_x: int | None = None
        last_y: int | None = None

        for point in series.history:
            if not TimeWindow.contains(point.timestamp, start, end):
                continue

            x = TimeWindow.to_column(
                point.timestamp,
                start,
                end,
                canvas.dot_width,
            )

            if x in (OFF_LEFT_EDGE, OFF_RIGHT_EDGE):
                continue

            y = self._to_dot_row(
                point.value,
                value_range,
                canvas.dot_height,
            )

            if last_x is None or last_y is None:
                canvas.set_dot(x, y, color)

            else:
                canvas.draw_line(last_x, last_y, x, y, color)

            last_x, last_y = x, y

    def _to_dot_row(
        self,
        value: float,
        value_range: ValueRange,
        dot_height: int,
    ) -> int:
        # Timeouts spike to the ceiling rather than vanishing.
        if not math.isfinite(value):
            return 0

        normalized = value_range.normalize(value)
        if not math.isfinite(normalized):
            return 0

        row = int((1.0 - normalized) * (dot_height - 1))

        return min(max(row, 0), dot_height - 1)

    def _y_axis_labels(
        self,
        value_range: ValueRange,
        body_height: int,
    ) -> dict[int, str]:
        label_count = min(self._config.y_axis_label_count, body_height)
        labels: dict[int, str] = {}

        if label_count <= 1:
            return labels

        for idx in range(label_count):
            normalized = idx / (label_count - 1)
            value = value_range.maximum - normalized * value_range.span
            row = int(round(normalized * (body_height - 1)))

            labels[row] = format_latency(value)

        return labels

    def _render_body(
        self,
        canvas: BrailleCanvas,
        value_range: ValueRange,
        label_width: int,
    ) -> list[str]:
        axis_color = self._config.axis_color
        labels = self._y_axis_labels(value_range, canvas.rows)
        label_slot = label_width - Y_AXIS_SEPARATOR_WIDTH

        lines: list[str] = []

        for row in range(canvas.rows):
            label = labels.get(row, "")

            lines.append(
                f"[{axis_color}]{label:>{label_slot}}[white] [{axis_color}]│[white]"
                + canvas.render_row(row)
            )

        return lines

    def _render_time_axis(
        self,
        start: float,
        end: float,
        label_width: int,
        chart_width: int,
    ) -> list[str]:
        axis_color = self._config.axis_color

        axis_rule = " " * (label_width - 1) + "└" + "─" * chart_width

        start_label = self._format_time(start)
        end_label = self._format_time(end)

        space_count = chart_width - len(start_label) - len(end_label)

        # Labels never run past the chart edge; the end label goes first.
        if space_count < 1:
            time_line = " " * label_width + start_label[:chart_width]

        else:
            time_line = (
                " " * label_width + start_label + " " * space_count + end_label
            )

        return [
            f"[{axis_color}]{axis_rule}[white]",
            f"[{axis_color}]{time_line}[white]",
        ]

    def _format_time(self, timestamp: float) -> str:
        return datetime.datetime.fromtimestamp(timestamp).strftime(
            self._config.time_format
        )
