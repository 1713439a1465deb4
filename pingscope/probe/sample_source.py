import asyncio
import math
import time
from typing import AsyncIterator

from pingscope.core.models import Sample


class SampleSource:
    """
    Producer side of the sample stream.

    One task per target probes on a fixed interval and publishes into a
    single bounded queue. A full queue drops the new sample instead of
    blocking the prober. ``stop`` waits for every prober to finish and
    then closes the stream exactly once by enqueuing a closing marker;
    the consumer only reads.
    """

    def __init__(
        self,
        targets: list[str],
        interval: float,
        buffer_size: int,
    ) -> None:
        self.targets = list(targets)
        self.interval = interval

        self._queue: asyncio.Queue[Sample | None] = asyncio.Queue(maxsize=buffer_size)
        self._stop = asyncio.Event()
        self._tasks: list[asyncio.Task] = []

        self._closed = False
        self._finished = False

        self.dropped_samples = 0

    @property
    def running(self) -> bool:
        return len(self._tasks) > 0 and not self._stop.is_set()

    @property
    def closed(self) -> bool:
        return self._closed

    async def probe(self, target: str) -> Sample:
        raise NotImplementedError("SampleSource subclasses must implement probe()")

    def start(self):
        if len(self._tasks) > 0 or self._closed:
            return

        self._tasks = [
            asyncio.ensure_future(self._run_target(target)) for target in self.targets
        ]

    async def stop(self):
        if self._closed:
            return

        self._stop.set()

        for task in self._tasks:
            if not task.done():
                task.cancel()

        await asyncio.gather(*self._tasks, return_exceptions=True)

        # Make room for the closing marker.
        while self._queue.full():
            self._queue.get_nowait()

        self._queue.put_nowait(None)
        self._closed = True

    async def next_sample(self) -> Sample | None:
        if self._finished:
            return None

        sample = await self._queue.get()
        if sample is None:
            self._finished = True

        return sample

    async def stream(self) -> AsyncIterator[Sample]:
        while (sample := await self.next_sample()) is not None:
            yield sample

    def publish(self, sample: Sample) -> bool:
        if self._stop.is_set():
            return False

        try:
            self._queue.put_nowait(sample)
            return True

        except asyncio.QueueFull:
            self.dropped_samples += 1
            return False

    async def _run_target(self, target: str):
        loop = asyncio.get_event_loop()
        next_send = loop.time()

        while not self._stop.is_set():
            sample = await self.probe(target)
            self.publish(sample)

            next_send += self.interval
            delay = next_send - loop.time()

            # A probe that outlived its slot skips the missed ticks.
            if delay < 0:
                next_send = loop.time()
                delay = 0

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=delay)

            except asyncio.TimeoutError:
                pass


def failed_sample(target: str, send_time: float | None = None) -> Sample:
    if send_time is None:
        send_time = time.time()

    return Sample(
        target=target,
        latency=math.nan,
        send_time=send_time,
        receive_time=time.time(),
    )
