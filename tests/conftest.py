"""
Shared fixtures for the pingscope test suite.

Nothing here touches the network or needs elevated privileges: probe
behaviour is exercised through in-memory sources.
"""

import math
from typing import Callable

import pytest

from pingscope.core.alignment import TimeAligner
from pingscope.core.models import DataPoint, PointStatus, Sample
from pingscope.core.series import SeriesStore
from pingscope.logging import LoggingConfig

BASE_TIME = 1_700_000_000.0
TICK = 0.2


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="debug")
    yield
    config.update(log_level="info")


@pytest.fixture
def base_time() -> float:
    return BASE_TIME


@pytest.fixture
def store() -> SeriesStore:
    return SeriesStore()


@pytest.fixture
def aligner(store: SeriesStore) -> TimeAligner:
    return TimeAligner(
        store,
        history_capacity=150,
        tick_interval=TICK,
    )


@pytest.fixture
def sample_factory() -> Callable[..., Sample]:
    def create_sample(
        send_time: float,
        latency: float = 10.0,
        target: str = "host-a",
    ) -> Sample:
        receive_time = send_time
        if math.isfinite(latency):
            receive_time = send_time + latency / 1000

        return Sample(
            target=target,
            latency=latency,
            send_time=send_time,
            receive_time=receive_time,
        )

    return create_sample


@pytest.fixture
def point_factory() -> Callable[..., DataPoint]:
    def create_point(
        timestamp: float,
        value: float = 10.0,
        status: PointStatus = PointStatus.SUCCESS,
    ) -> DataPoint:
        return DataPoint(
            timestamp=timestamp,
            value=value,
            status=status,
        )

    return create_point
