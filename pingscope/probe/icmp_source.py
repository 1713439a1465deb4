from pingscope.core.models import Sample
from pingscope.logging import Logger, ProbeError, ProbeInfo

from .icmp_probe import IcmpProbe
from .probe_config import ProbeConfig
from .sample_source import SampleSource, failed_sample


class IcmpSampleSource(SampleSource):
    def __init__(
        self,
        targets: list[str],
        config: ProbeConfig,
        probe: IcmpProbe | None = None,
        logger: Logger | None = None,
    ) -> None:
        super().__init__(
            targets,
            config.interval,
            config.buffer_size,
        )

        if probe is None:
            probe = IcmpProbe(config)

        self.config = config
        self._probe = probe
        self._logger = logger

    async def setup(self):
        """Check socket access and resolve every target once, up front."""
        self._probe.check()
        addresses = await self._probe.resolve(self.targets)

        for target, address in addresses.items():
            await self._log(
                ProbeInfo(
                    message="Resolved target",
                    target=target,
                    address=address,
                )
            )

        return addresses

    async def probe(self, target: str) -> Sample:
        try:
            return await self._probe.ping(target)

        except OSError as err:
            await self._log(
                ProbeError(
                    message="Probe failed",
                    target=target,
                    error=str(err),
                )
            )

            return failed_sample(target)

    async def _log(self, entry: ProbeInfo | ProbeError):
        if self._logger is None:
            return

        await self._logger.log(entry, name="probe")
