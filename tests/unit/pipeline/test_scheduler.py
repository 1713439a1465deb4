"""
Tests for the pipeline scheduler loop.
"""

import asyncio
import math
import time
from typing import Callable

import pytest

from pingscope.core.alignment import TimeAligner
from pingscope.core.models import DataPoint, PointStatus, Sample
from pingscope.core.series import SeriesStore
from pingscope.pipeline import PipelineConfig, PipelineScheduler


class QueueSource:
    """In-memory sample stream fed by the test."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[Sample | None] = asyncio.Queue()

    async def next_sample(self) -> Sample | None:
        return await self.queue.get()


class RefreshCounter:
    def __init__(self) -> None:
        self.count = 0

    async def __call__(self) -> None:
        self.count += 1


@pytest.fixture
def config() -> PipelineConfig:
    return PipelineConfig.create(
        refresh_interval=0.02,
        maintenance_interval=0.02,
    )


@pytest.fixture
def source() -> QueueSource:
    return QueueSource()


@pytest.fixture
def refresh() -> RefreshCounter:
    return RefreshCounter()


@pytest.fixture
def scheduler(
    source: QueueSource,
    store: SeriesStore,
    aligner: TimeAligner,
    config: PipelineConfig,
    refresh: RefreshCounter,
) -> PipelineScheduler:
    return PipelineScheduler(
        source,
        store,
        aligner,
        config,
        probe_timeout=1.0,
        on_refresh=refresh,
    )


# =============================================================================
# Loop
# =============================================================================


class TestPipelineScheduler:
    """Test ingest, refresh and shutdown behaviour."""

    async def test_initial_refresh_before_samples(
        self,
        scheduler: PipelineScheduler,
        source: QueueSource,
        refresh: RefreshCounter,
    ) -> None:
        await source.queue.put(None)

        await asyncio.wait_for(scheduler.run(), timeout=2)

        assert refresh.count >= 1
        assert scheduler.samples_ingested == 0
        assert scheduler.running is False

    async def test_samples_are_ingested(
        self,
        scheduler: PipelineScheduler,
        source: QueueSource,
        store: SeriesStore,
        sample_factory: Callable[..., Sample],
        base_time: float,
    ) -> None:
        for idx in range(3):
            await source.queue.put(sample_factory(base_time + idx * 0.2, 10.0 + idx))

        await source.queue.put(None)

        await asyncio.wait_for(scheduler.run(), timeout=2)

        series = store.get("host-a")

        assert scheduler.samples_ingested == 3
        assert series is not None
        assert series.packets_sent == 3
        assert [point.value for point in series.history] == [10.0, 11.0, 12.0]

    async def test_periodic_refresh(
        self,
        scheduler: PipelineScheduler,
        refresh: RefreshCounter,
    ) -> None:
        task = asyncio.create_task(scheduler.run())

        await asyncio.sleep(0.15)
        scheduler.stop()

        await asyncio.wait_for(task, timeout=2)

        assert refresh.count >= 3
        assert scheduler.refreshes == refresh.count

    async def test_stop_ends_loop(
        self,
        scheduler: PipelineScheduler,
    ) -> None:
        task = asyncio.create_task(scheduler.run())

        await asyncio.sleep(0)
        scheduler.stop()

        await asyncio.wait_for(task, timeout=2)

        assert task.done()
        assert scheduler.running is False

    async def test_maintenance_expires_pending(
        self,
        scheduler: PipelineScheduler,
        store: SeriesStore,
    ) -> None:
        series = store.get_or_create("host-a")
        series.history.append(
            DataPoint(
                timestamp=time.time() - 60,
                value=math.nan,
                status=PointStatus.PENDING,
            )
        )

        task = asyncio.create_task(scheduler.run())

        await asyncio.sleep(0.1)
        scheduler.stop()

        await asyncio.wait_for(task, timeout=2)

        assert scheduler.points_expired == 1
        assert series.history[0].status == PointStatus.TIMEOUT
