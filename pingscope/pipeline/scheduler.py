import asyncio
import time
from typing import Awaitable, Callable, Protocol

from pingscope.core.alignment import TimeAligner
from pingscope.core.models import Sample
from pingscope.core.series import SeriesStore
from pingscope.logging import Logger, PipelineDebug, PipelineInfo

from .pipeline_config import PipelineConfig

RefreshCallback = Callable[[], Awaitable[None]]


class SampleStream(Protocol):
    async def next_sample(self) -> Sample | None: ...


class PipelineScheduler:
    """
    Single consumer of the sample stream and sole writer of the series
    store. One loop waits on the next sample, the refresh timer, the
    maintenance timer and the stop event at once, and dispatches
    whichever fires first.
    """

    def __init__(
        self,
        source: SampleStream,
        store: SeriesStore,
        aligner: TimeAligner,
        config: PipelineConfig,
        probe_timeout: float,
        on_refresh: RefreshCallback,
        logger: Logger | None = None,
    ) -> None:
        self._source = source
        self._store = store
        self._aligner = aligner
        self._config = config
        self._probe_timeout = probe_timeout
        self._on_refresh = on_refresh
        self._logger = logger

        self._stop = asyncio.Event()

        self.samples_ingested = 0
        self.refreshes = 0
        self.points_expired = 0

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    def stop(self):
        self._stop.set()

    async def run(self):
        loop = asyncio.get_event_loop()

        await self._log(
            PipelineInfo(
                message="Pipeline scheduler started",
                targets=self._store.targets(),
                history_capacity=self._config.history_capacity,
                refresh_interval=self._config.refresh_interval,
            )
        )

        # First frame goes out before any sample arrives.
        await self._refresh()

        next_refresh = loop.time() + self._config.refresh_interval
        next_maintenance = loop.time() + self._config.maintenance_interval

        sample_task = asyncio.ensure_future(self._source.next_sample())
        stop_task = asyncio.ensure_future(self._stop.wait())

        try:
            while True:
                timeout = max(min(next_refresh, next_maintenance) - loop.time(), 0)

                done, _ = await asyncio.wait(
                    [sample_task, stop_task],
                    timeout=timeout,
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if stop_task in done:
                    break

                if sample_task in done:
                    sample = sample_task.result()
                    if sample is None:
                        break

                    await self._ingest(sample)
                    sample_task = asyncio.ensure_future(self._source.next_sample())

                current = loop.time()

                if current >= next_refresh:
                    await self._refresh()
                    next_refresh = current + self._config.refresh_interval

                if current >= next_maintenance:
                    self._expire()
                    next_maintenance = current + self._config.maintenance_interval

        finally:
            for task in (sample_task, stop_task):
                if not task.done():
                    task.cancel()

            await asyncio.gather(
                sample_task,
                stop_task,
                return_exceptions=True,
            )

            self._stop.set()

        await self._log(
            PipelineInfo(
                message="Pipeline scheduler stopped",
                targets=self._store.targets(),
                history_capacity=self._config.history_capacity,
                refresh_interval=self._config.refresh_interval,
            )
        )

    async def _ingest(self, sample: Sample):
        series = self._aligner.ingest(sample)
        self.samples_ingested += 1

        await self._log(
            PipelineDebug(
                message="Ingested sample",
                target=series.target,
                history_length=len(series.history),
                packets_sent=series.packets_sent,
            )
        )

    async def _refresh(self):
        await self._on_refresh()
        self.refreshes += 1

    def _expire(self):
        self.points_expired += self._aligner.expire_pending(
            time.time(),
            self._config.timeout_threshold(self._probe_timeout),
        )

    async def _log(self, entry: PipelineInfo | PipelineDebug):
        if self._logger is None:
            return

        await self._logger.log(entry, name="pipeline")
