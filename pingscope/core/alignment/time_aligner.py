import bisect
import math

from pingscope.core.models import DataPoint, PointStatus, Sample
from pingscope.core.series import Series, SeriesStore
from pingscope.core.stats import build_summary, update_running_stats

# Fraction of a tick absorbed when converting a gap to steps. Epoch
# timestamps lose precision on subtraction, so a gap of exactly 3 ticks
# can come out as 2.99999... ticks.
STEP_TOLERANCE = 1e-3


class TimeAligner:
    """
    Inserts samples into each target's history ordered by send time and
    synthesizes filler points across gaps that follow a timeout.
    """

    def __init__(
        self,
        store: SeriesStore,
        history_capacity: int,
        tick_interval: float,
        max_interpolation_steps: int | None = None,
    ) -> None:
        if max_interpolation_steps is None:
            max_interpolation_steps = history_capacity

        self._store = store
        self._history_capacity = history_capacity
        self._tick_interval = tick_interval
        self._max_interpolation_steps = max_interpolation_steps

    @property
    def store(self):
        return self._store

    def ingest(self, sample: Sample) -> Series:
        with self._store.lock:
            series = self._store.get_or_create(sample.target)
            point = DataPoint.from_sample(sample)

            self._insert(series, point)

            series.packets_sent += 1
            if point.status == PointStatus.SUCCESS:
                series.packets_received += 1
                update_running_stats(series.stats, point.value)
                series.record_success(point.value)

            self._evict(series)
            series.summary = build_summary(series)

            return series

    def expire_pending(
        self,
        now: float,
        threshold: float,
    ) -> int:
        """Flip PENDING points older than ``threshold`` seconds to TIMEOUT."""
        expired = 0

        with self._store.lock:
            for series in self._store:
                for point in reversed(series.history):
                    if (
                        point.status == PointStatus.PENDING
                        and now - point.timestamp > threshold
                    ):
                        point.status = PointStatus.TIMEOUT
                        point.value = math.nan
                        expired += 1

        return expired

    def _insert(
        self,
        series: Series,
        point: DataPoint,
    ):
        history = series.history

        if len(history) == 0:
            history.append(point)
            return

        last_point = history[-1]
        if point.timestamp >= last_point.timestamp:
            history.extend(self._synthesize(series, last_point, point))
            history.append(point)
            return

        # Late sample: ordered insert after any equal timestamps, no synthesis.
        insert_at = bisect.bisect_right(
            history,
            point.timestamp,
            key=lambda existing: existing.timestamp,
        )

        history.insert(insert_at, point)

    def _synthesize(
        self,
        series: Series,
        last_point: DataPoint,
        point: DataPoint,
    ) -> list[DataPoint]:
        if last_point.status != PointStatus.TIMEOUT:
            return []

        if point.status not in (PointStatus.SUCCESS, PointStatus.TIMEOUT):
            return []

        gap = point.timestamp - last_point.timestamp
        steps = int(math.floor(gap / self._tick_interval + STEP_TOLERANCE))

        if steps <= 1:
            return []

        if steps > self._max_interpolation_steps:
            return [
                DataPoint(
                    timestamp=last_point.timestamp + gap / 2,
                    value=math.nan,
                    status=PointStatus.INTERPOLATED,
                )
            ]

        step_duration = gap / steps

        if point.status == PointStatus.TIMEOUT:
            return [
                DataPoint(
                    timestamp=last_point.timestamp + idx * step_duration,
                    value=math.nan,
                    status=PointStatus.INTERPOLATED,
                )
                for idx in range(1, steps)
            ]

        ceiling = series.max_latency
        if not math.isfinite(ceiling):
            ceiling = point.value

        return [
            DataPoint(
                timestamp=last_point.timestamp + idx * step_duration,
                value=ceiling + (point.value - ceiling) * idx / steps,
                status=PointStatus.INTERPOLATED,
            )
            for idx in range(1, steps)
        ]

    def _evict(self, series: Series):
        overflow = len(series.history) - self._history_capacity
        if overflow > 0:
            del series.history[:overflow]
