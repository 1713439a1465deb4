from __future__ import annotations

import math
from dataclasses import dataclass, field

from pingscope.core.models import DataPoint
from pingscope.core.stats import (
    RunningStats,
    loss_rate,
    standard_deviation,
    variance,
)


@dataclass(slots=True)
class Series:
    """
    Aggregate state for one target: the bounded, time-ordered history
    used by the chart plus the global accumulators used by the table.
    """

    target: str
    history: list[DataPoint] = field(default_factory=list)
    packets_sent: int = 0
    packets_received: int = 0
    stats: RunningStats = field(default_factory=RunningStats)
    min_latency: float = math.inf
    max_latency: float = -math.inf
    summary: dict[str, str] = field(default_factory=dict)

    @property
    def loss_rate(self) -> float:
        return loss_rate(self.packets_sent, self.packets_received)

    @property
    def variance(self) -> float | None:
        return variance(self.stats)

    @property
    def stddev(self) -> float | None:
        return standard_deviation(self.stats)

    def record_success(self, latency: float) -> None:
        if latency < self.min_latency:
            self.min_latency = latency

        if latency > self.max_latency:
            self.max_latency = latency

    def copy(self) -> Series:
        return Series(
            target=self.target,
            history=[
                DataPoint(
                    timestamp=point.timestamp,
                    value=point.value,
                    status=point.status,
                )
                for point in self.history
            ],
            packets_sent=self.packets_sent,
            packets_received=self.packets_received,
            stats=RunningStats(
                count=self.stats.count,
                mean=self.stats.mean,
                m2=self.stats.m2,
            ),
            min_latency=self.min_latency,
            max_latency=self.max_latency,
            summary=dict(self.summary),
        )
