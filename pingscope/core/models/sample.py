import math
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Sample:
    """One probe result as produced by the probe engine."""

    target: str
    latency: float  # ms, NaN on timeout or failure
    send_time: float
    receive_time: float

    @property
    def failed(self) -> bool:
        return not math.isfinite(self.latency)
