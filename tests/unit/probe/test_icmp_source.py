"""
Tests for the ICMP sample source using in-memory probes.
"""

import math
import socket

import pytest

from pingscope.core.errors import ProbeSetupError
from pingscope.core.models import Sample
from pingscope.logging import Logger, ProbeError, ProbeInfo
from pingscope.probe import IcmpProbe, IcmpSampleSource, ProbeConfig


class RecordingLogger(Logger):
    def __init__(self) -> None:
        super().__init__()
        self.entries: list[tuple[str | None, object]] = []

    async def log(self, entry, name=None):
        self.entries.append((name, entry))


class FakeProbe(IcmpProbe):
    def __init__(self, config: ProbeConfig, error: Exception | None = None) -> None:
        super().__init__(config, privileged=False)
        self.error = error

    def check(self):
        if isinstance(self.error, ProbeSetupError):
            raise self.error

    async def resolve(self, targets: list[str]) -> dict[str, str]:
        self.addresses = {target: "127.0.0.1" for target in targets}
        return dict(self.addresses)

    async def ping(self, target: str) -> Sample:
        if self.error is not None:
            raise self.error

        return Sample(target=target, latency=5.0, send_time=1.0, receive_time=1.005)


@pytest.fixture
def config() -> ProbeConfig:
    return ProbeConfig.create()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


class TestIcmpSampleSource:
    async def test_setup_resolves_and_logs(
        self,
        config: ProbeConfig,
        logger: RecordingLogger,
    ) -> None:
        source = IcmpSampleSource(
            ["host-a", "host-b"],
            config,
            probe=FakeProbe(config),
            logger=logger,
        )

        addresses = await source.setup()

        assert addresses == {"host-a": "127.0.0.1", "host-b": "127.0.0.1"}
        assert [name for name, _ in logger.entries] == ["probe", "probe"]
        assert all(isinstance(entry, ProbeInfo) for _, entry in logger.entries)

    async def test_setup_error_propagates(self, config: ProbeConfig) -> None:
        source = IcmpSampleSource(
            ["host-a"],
            config,
            probe=FakeProbe(config, error=ProbeSetupError("no socket")),
        )

        with pytest.raises(ProbeSetupError):
            await source.setup()

    async def test_probe_success(self, config: ProbeConfig) -> None:
        source = IcmpSampleSource(["host-a"], config, probe=FakeProbe(config))

        sample = await source.probe("host-a")

        assert sample.latency == 5.0

    async def test_socket_error_becomes_failed_sample(
        self,
        config: ProbeConfig,
        logger: RecordingLogger,
    ) -> None:
        source = IcmpSampleSource(
            ["host-a"],
            config,
            probe=FakeProbe(config, error=OSError("network unreachable")),
            logger=logger,
        )

        sample = await source.probe("host-a")

        assert sample.target == "host-a"
        assert math.isnan(sample.latency)

        _, entry = logger.entries[-1]

        assert isinstance(entry, ProbeError)
        assert entry.error == "network unreachable"


class TestIcmpProbe:
    def test_sequence_wraps_per_target(self, config: ProbeConfig) -> None:
        probe = IcmpProbe(config, privileged=False)

        assert probe.next_sequence("host-a") == 1
        assert probe.next_sequence("host-a") == 2
        assert probe.next_sequence("host-b") == 1

        probe._sequences["host-a"] = 0xFFFF

        assert probe.next_sequence("host-a") == 0

    def test_ipv6_family(self) -> None:
        probe = IcmpProbe(ProbeConfig.create(ip_version=6), privileged=False)

        assert probe.family == socket.AF_INET6
        assert probe.protocol == socket.IPPROTO_ICMPV6
