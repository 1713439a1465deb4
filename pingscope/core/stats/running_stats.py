import math
from dataclasses import dataclass


@dataclass(slots=True)
class RunningStats:
    """Sufficient statistics for Welford's online mean/variance."""

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0


def update_running_stats(stats: RunningStats, value: float) -> None:
    """
    Fold one finite value into the running statistics.

    Uses Welford's algorithm so that long-running streams do not lose
    precision the way a sum / sum-of-squares accumulator would.
    """
    stats.count += 1
    delta = value - stats.mean
    stats.mean += delta / stats.count
    delta2 = value - stats.mean
    stats.m2 += delta * delta2


def variance(stats: RunningStats) -> float | None:
    if stats.count <= 1:
        return None

    return stats.m2 / (stats.count - 1)


def standard_deviation(stats: RunningStats) -> float | None:
    sample_variance = variance(stats)
    if sample_variance is None:
        return None

    return math.sqrt(sample_variance)


def loss_rate(sent: int, received: int) -> float:
    """Loss as a percentage of packets sent, 0.0 when nothing was sent."""
    if sent == 0:
        return 0.0

    return (sent - received) / sent * 100
