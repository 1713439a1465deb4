"""
Tests for log entry routing to files and standard streams.
"""

import pathlib

import msgspec
import pytest

from pingscope.logging import (
    Logger,
    LoggerStream,
    LoggingConfig,
    LogLevel,
    PipelineDebug,
    ProbeError,
    ProbeInfo,
)


def read_lines(path: pathlib.Path) -> list[dict]:
    return [msgspec.json.decode(line) for line in path.read_bytes().splitlines()]


# =============================================================================
# Files
# =============================================================================


class TestFileOutput:
    """Test JSON lines written to a log file."""

    async def test_entry_written_as_json(self, tmp_path: pathlib.Path) -> None:
        stream = LoggerStream(
            name="probe",
            filename="probe.log.json",
            directory=str(tmp_path),
        )

        await stream.log(
            ProbeInfo(
                message="Resolved target",
                target="host-a",
                address="10.0.0.1",
            )
        )
        await stream.close()

        [log] = read_lines(tmp_path / "probe.log.json")

        assert log["entry"]["target"] == "host-a"
        assert log["entry"]["address"] == "10.0.0.1"
        assert log["entry"]["level"] == "INFO"
        assert log["function_name"] == "test_entry_written_as_json"

    async def test_entries_are_appended(self, tmp_path: pathlib.Path) -> None:
        stream = LoggerStream(
            name="pipeline",
            filename="pipeline.log.json",
            directory=str(tmp_path),
        )

        for idx in range(3):
            await stream.log(
                PipelineDebug(
                    message="Ingested sample",
                    target="host-a",
                    history_length=idx + 1,
                    packets_sent=idx + 1,
                )
            )

        await stream.close()

        lines = read_lines(tmp_path / "pipeline.log.json")

        assert [log["entry"]["history_length"] for log in lines] == [1, 2, 3]

    async def test_logger_context_path(self, tmp_path: pathlib.Path) -> None:
        logfile = tmp_path / "nested" / "pingscope.log.json"

        logger = Logger()
        logger.context(name="probe", path=str(logfile))

        await logger.log(
            ProbeError(
                message="Probe failed",
                target="host-a",
                error="timed out",
            ),
            name="probe",
        )
        await logger.close()

        [log] = read_lines(logfile)

        assert log["entry"]["error"] == "timed out"
        assert log["entry"]["level"] == "ERROR"


# =============================================================================
# Streams
# =============================================================================


class TestStreamOutput:
    """Test templated lines written to stderr."""

    async def test_template_written_to_stderr(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        stream = LoggerStream(name="probe")

        await stream.log(
            ProbeError(
                message="Probe failed",
                target="host-a",
                error="timed out",
            )
        )

        captured = capsys.readouterr()

        assert "ERROR" in captured.err
        assert "Probe failed" in captured.err
        assert captured.out == ""

    async def test_custom_template(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        stream = LoggerStream(name="probe", template="{level}:{target}")

        await stream.log(
            ProbeInfo(
                target="host-a",
                address="10.0.0.1",
            )
        )

        assert capsys.readouterr().err == "INFO:host-a\n"

    async def test_entries_below_level_are_dropped(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        LoggingConfig().update(log_level="error")

        stream = LoggerStream(name="pipeline")

        await stream.log(
            PipelineDebug(
                target="host-a",
                history_length=1,
                packets_sent=1,
            )
        )

        assert capsys.readouterr().err == ""

    async def test_disabled_logger(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        config = LoggingConfig()
        config.update(disabled_loggers=["probe"])

        try:
            await LoggerStream(name="probe").log(
                ProbeError(target="host-a", error="timed out")
            )

        finally:
            config.update(disabled_loggers=[])

        assert capsys.readouterr().err == ""


class TestLoggingConfig:
    def test_level_update(self) -> None:
        config = LoggingConfig()
        config.update(log_level="warn")

        assert config.level == LogLevel.WARN
        assert config.enabled("probe", LogLevel.ERROR) is True
        assert config.enabled("probe", LogLevel.INFO) is False
