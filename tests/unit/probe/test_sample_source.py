"""
Tests for the producer side of the sample stream.
"""

import asyncio
import math

import pytest

from pingscope.core.models import Sample
from pingscope.probe import SampleSource, failed_sample


class CountingSource(SampleSource):
    """Returns an instant sample with an increasing latency per target."""

    def __init__(self, targets: list[str], interval: float, buffer_size: int) -> None:
        super().__init__(targets, interval, buffer_size)
        self.probes: dict[str, int] = {target: 0 for target in targets}

    async def probe(self, target: str) -> Sample:
        self.probes[target] += 1

        return Sample(
            target=target,
            latency=float(self.probes[target]),
            send_time=float(self.probes[target]),
            receive_time=float(self.probes[target]),
        )


def make_sample(target: str = "host-a") -> Sample:
    return Sample(target=target, latency=1.0, send_time=1.0, receive_time=1.0)


class TestSampleSource:
    async def test_publish_drops_when_full(self) -> None:
        source = CountingSource(["host-a"], interval=1.0, buffer_size=2)

        assert source.publish(make_sample()) is True
        assert source.publish(make_sample()) is True
        assert source.publish(make_sample()) is False

        assert source.dropped_samples == 1

    async def test_stop_closes_stream_once(self) -> None:
        source = CountingSource(["host-a"], interval=1.0, buffer_size=2)

        source.publish(make_sample())
        source.publish(make_sample())

        await source.stop()
        await source.stop()

        assert source.closed is True

        received = [sample async for sample in source.stream()]

        assert len(received) == 1
        assert await source.next_sample() is None

    async def test_publish_after_stop_is_rejected(self) -> None:
        source = CountingSource(["host-a"], interval=1.0, buffer_size=2)

        await source.stop()

        assert source.publish(make_sample()) is False
        assert source.dropped_samples == 0

    async def test_probes_every_target(self) -> None:
        source = CountingSource(["host-a", "host-b"], interval=0.01, buffer_size=100)

        source.start()
        assert source.running is True

        await asyncio.sleep(0.05)
        await source.stop()

        samples = [sample async for sample in source.stream()]
        targets = {sample.target for sample in samples}

        assert targets == {"host-a", "host-b"}
        assert source.probes["host-a"] >= 2

        host_a = [sample.latency for sample in samples if sample.target == "host-a"]
        assert host_a == sorted(host_a)

    async def test_base_probe_is_abstract(self) -> None:
        source = SampleSource(["host-a"], interval=1.0, buffer_size=1)

        with pytest.raises(NotImplementedError):
            await source.probe("host-a")


def test_failed_sample() -> None:
    sample = failed_sample("host-a", send_time=10.0)

    assert sample.failed is True
    assert math.isnan(sample.latency)
    assert sample.send_time == 10.0
