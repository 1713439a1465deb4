import math
import sys

OFF_LEFT_EDGE = -1
OFF_RIGHT_EDGE = sys.maxsize


class TimeWindow:
    """
    Visible time span of the chart.

    While the pipeline is younger than ``span`` the window stays pinned at
    ``[start_time, start_time + span)`` so the chart fills from the left.
    After that it trails the current time.
    """

    def __init__(
        self,
        start_time: float,
        span: float,
    ) -> None:
        self.start_time = start_time
        self.span = span

    def is_rolling(self, now: float) -> bool:
        return now - self.start_time >= self.span

    def current_window(self, now: float) -> tuple[float, float]:
        if self.is_rolling(now):
            return now - self.span, now

        return self.start_time, self.start_time + self.span

    @staticmethod
    def contains(
        timestamp: float,
        start: float,
        end: float,
    ) -> bool:
        return start <= timestamp < end

    @staticmethod
    def to_column(
        timestamp: float,
        start: float,
        end: float,
        column_count: int,
    ) -> int:
        if timestamp < start:
            return OFF_LEFT_EDGE

        if timestamp >= end:
            return OFF_RIGHT_EDGE

        duration = end - start
        if duration <= 0:
            return 0

        column = int(math.floor((timestamp - start) / duration * column_count))

        return min(column, column_count - 1)
