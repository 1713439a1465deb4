import math
from dataclasses import dataclass
from typing import Iterable

from pingscope.core.series import Series
from pingscope.core.window import TimeWindow


@dataclass(slots=True)
class ValueRange:
    minimum: float
    maximum: float

    @property
    def span(self) -> float:
        span = self.maximum - self.minimum
        if span == 0:
            return 1.0

        return span

    def normalize(self, value: float) -> float:
        return (value - self.minimum) / self.span


def compute_value_range(
    series: Iterable[Series],
    start: float,
    end: float,
    buffer_ratio: float,
    floor: float = 0,
) -> ValueRange | None:
    """
    Min/max of the finite in-window values across every series, widened
    by ``buffer_ratio`` and clamped so the minimum never drops below
    ``floor``. Returns None when the window holds no finite value.
    """
    minimum: float | None = None
    maximum: float | None = None

    for target_series in series:
        for point in target_series.history:
            if not TimeWindow.contains(point.timestamp, start, end):
                continue

            if not math.isfinite(point.value):
                continue

            if minimum is None or point.value < minimum:
                minimum = point.value

            if maximum is None or point.value > maximum:
                maximum = point.value

    if minimum is None or maximum is None:
        return None

    if minimum == maximum:
        minimum -= 1
        maximum += 1

    maximum += maximum * buffer_ratio
    minimum -= minimum * buffer_ratio

    if minimum < floor:
        minimum = floor

    return ValueRange(
        minimum=minimum,
        maximum=maximum,
    )
