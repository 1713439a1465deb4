import threading
from typing import Iterator

from .series import Series


class SeriesStore:
    """
    Per-target Series keyed by target identifier.

    The pipeline scheduler is the only writer. Readers on other threads or
    tasks take a snapshot under the store lock instead of reading live
    Series, so a render pass never observes a half-applied update.
    """

    def __init__(self) -> None:
        self._series: dict[str, Series] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._series)

    def __contains__(self, target: str) -> bool:
        return target in self._series

    def __iter__(self) -> Iterator[Series]:
        return iter(list(self._series.values()))

    def get(self, target: str) -> Series | None:
        return self._series.get(target)

    def get_or_create(self, target: str) -> Series:
        series = self._series.get(target)
        if series is None:
            series = Series(target=target)
            self._series[target] = series

        return series

    def targets(self) -> list[str]:
        return list(self._series.keys())

    def snapshot(
        self,
        targets: list[str] | None = None,
    ) -> dict[str, Series]:
        """
        Copy the requested Series (all of them when ``targets`` is None),
        preserving the order of ``targets`` and skipping unseen ones.
        """
        with self.lock:
            if targets is None:
                targets = list(self._series.keys())

            return {
                target: self._series[target].copy()
                for target in targets
                if target in self._series
            }
