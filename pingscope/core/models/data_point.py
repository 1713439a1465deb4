from __future__ import annotations

import math
from dataclasses import dataclass

from .point_status import PointStatus
from .sample import Sample


@dataclass(slots=True)
class DataPoint:
    timestamp: float
    value: float
    status: PointStatus

    @classmethod
    def from_sample(cls, sample: Sample) -> DataPoint:
        status = PointStatus.TIMEOUT if sample.failed else PointStatus.SUCCESS

        return cls(
            timestamp=sample.send_time,
            value=sample.latency if status == PointStatus.SUCCESS else math.nan,
            status=status,
        )

    @property
    def has_value(self) -> bool:
        return math.isfinite(self.value)
