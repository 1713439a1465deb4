import asyncio
import sys
import time
from typing import Literal

from pingscope import __version__
from pingscope.core.alignment import TimeAligner
from pingscope.core.errors import ConfigurationError, PingscopeError
from pingscope.core.series import SeriesStore
from pingscope.core.time_parser import TimeParser
from pingscope.core.window import TimeWindow
from pingscope.logging import Logger, LoggingConfig
from pingscope.pipeline import PipelineConfig, PipelineScheduler
from pingscope.probe import IcmpSampleSource, ProbeConfig, system_info
from pingscope.ui.components.chart import LatencyChart
from pingscope.ui.components.summary_table import SummaryTable, SummaryTableConfig
from pingscope.ui.components.terminal import (
    KEY_DOWN,
    KEY_UP,
    KeyReader,
    Terminal,
    TerminalConfig,
)
from pingscope.ui.dashboard import Dashboard
from pingscope.ui.styling.colors import TargetPalette

from .cli import CLI, run_cli

APP_NAME = "pingscope"
APP_DESCRIPTION = "Live terminal latency dashboard for one or more hosts"

LogLevelOption = Literal["trace", "debug", "info", "warn", "error", "critical", "fatal"]


async def write(text: str, stream=None):
    if stream is None:
        stream = sys.stdout

    loop = asyncio.get_event_loop()
    await loop.run_in_executor(None, stream.write, f"{text}\n")


def build_configs(
    interval: str = "200ms",
    timeout: str = "3s",
    buffer: int = 150,
    refresh_rate: str = "200ms",
    chart_width: int = 20,
    chart_height: int = 5,
    timeout_buffer_ratio: float = 1.2,
    ipv6: bool = False,
    no_color: bool = False,
):
    parser = TimeParser()
    probe_interval = parser.parse(interval)

    probe_config = ProbeConfig.create(
        ip_version=6 if ipv6 else 4,
        interval=probe_interval,
        timeout=parser.parse(timeout),
    )

    pipeline_config = PipelineConfig.create(
        history_capacity=buffer,
        refresh_interval=parser.parse(refresh_rate),
        maintenance_interval=probe_interval,
        timeout_buffer_ratio=timeout_buffer_ratio,
        min_chart_width=chart_width,
        min_chart_height=chart_height,
    )

    terminal_config = TerminalConfig(no_color=no_color)

    return pipeline_config, probe_config, terminal_config


def describe_running_config(
    targets: list[str],
    pipeline_config: PipelineConfig,
    probe_config: ProbeConfig,
) -> list[str]:
    info = system_info()

    return [
        f"Targets: {', '.join(targets)}",
        f"Ping interval: {probe_config.interval}s",
        f"Ping timeout: {probe_config.timeout}s",
        f"History size: {pipeline_config.history_capacity}",
        f"Refresh interval: {pipeline_config.refresh_interval}s",
        f"Timeout threshold: {pipeline_config.timeout_threshold(probe_config.timeout):.2f}s",
        "",
        "System:",
        f"  OS: {info.os_name}",
        f"  Privileges: {info.privilege_status}",
        f"  Implementation: {info.implementation}",
        "",
        "Keys: up/down select a target, q or Ctrl+C quits",
    ]


async def run_dashboard(
    targets: list[str],
    pipeline_config: PipelineConfig,
    probe_config: ProbeConfig,
    terminal_config: TerminalConfig,
    logger: Logger | None = None,
):
    source = IcmpSampleSource(
        targets,
        probe_config,
        logger=logger,
    )

    await source.setup()

    store = SeriesStore()
    aligner = TimeAligner(
        store,
        pipeline_config.history_capacity,
        probe_config.interval,
        max_interpolation_steps=pipeline_config.interpolation_limit,
    )

    window = TimeWindow(time.time(), pipeline_config.window_span)
    terminal = Terminal(terminal_config)

    dashboard = Dashboard(
        targets,
        store,
        LatencyChart(pipeline_config.to_chart_config(), window),
        SummaryTable(SummaryTableConfig()),
        TargetPalette(targets),
        terminal,
    )

    scheduler = PipelineScheduler(
        source,
        store,
        aligner,
        pipeline_config,
        probe_config.timeout,
        dashboard.refresh,
        logger=logger,
    )

    keys = KeyReader(
        {
            KEY_UP: dashboard.select_previous,
            KEY_DOWN: dashboard.select_next,
            "q": scheduler.stop,
        }
    )

    await terminal.open(on_stop=scheduler.stop)
    keys.start()
    source.start()

    try:
        await scheduler.run()

    finally:
        keys.stop()
        await source.stop()
        await terminal.close()


@CLI.command()
async def version():
    """
    Print version, platform and probe implementation details
    """
    info = system_info()

    await write(f"{APP_NAME} v{__version__}")
    await write(f"Description: {APP_DESCRIPTION}")
    await write(f"OS: {info.os_name}")
    await write(f"Implementation: {info.implementation}")

    return 0


@CLI.root(
    version,
    name=APP_NAME,
    shortnames={
        "interval": "n",
        "timeout": "t",
        "buffer": "b",
        "refresh_rate": "r",
        "ipv6": "6",
    },
)
async def pingscope(
    targets: list[str],
    interval: str = "200ms",
    timeout: str = "3s",
    buffer: int = 150,
    refresh_rate: str = "200ms",
    chart_width: int = 20,
    chart_height: int = 5,
    timeout_buffer_ratio: float = 1.2,
    ipv6: bool = False,
    log_file: str = "logs/pingscope.log.json",
    log_level: LogLevelOption = "info",
    no_color: bool = False,
):
    """
    Live terminal latency dashboard for one or more hosts

    @param targets Hostnames or IP addresses to ping
    @param interval Time between pings per target (e.g. 100ms, 1s)
    @param timeout Time to wait for each reply (e.g. 3s, 1000ms)
    @param buffer Number of points kept in each target's chart history
    @param refresh_rate Time between dashboard redraws (e.g. 100ms, 500ms)
    @param chart_width Minimum chart width in columns
    @param chart_height Minimum chart height in rows
    @param timeout_buffer_ratio Multiplier on the ping timeout before a pending point counts as lost
    @param ipv6 Resolve and ping targets over IPv6
    @param log_file JSON log file path, empty to log to stderr
    @param log_level Minimum level written to the log
    @param no_color Disable colour output
    """
    try:
        pipeline_config, probe_config, terminal_config = build_configs(
            interval=interval,
            timeout=timeout,
            buffer=buffer,
            refresh_rate=refresh_rate,
            chart_width=chart_width,
            chart_height=chart_height,
            timeout_buffer_ratio=timeout_buffer_ratio,
            ipv6=ipv6,
            no_color=no_color,
        )

        if log_file and not log_file.endswith(".json"):
            raise ConfigurationError(f"Log file {log_file} must be a .json file")

    except ConfigurationError as err:
        await write(f"Error: {err}", stream=sys.stderr)
        return 1

    logging_config = LoggingConfig()
    logging_config.update(
        log_level=log_level,
        log_output="stderr",
    )

    logger = Logger()
    for name in ("pipeline", "probe"):
        logger.context(name=name, path=log_file or None)

    await write(f"Starting {APP_NAME} v{__version__}...")
    for line in describe_running_config(targets, pipeline_config, probe_config):
        await write(line)

    try:
        await run_dashboard(
            targets,
            pipeline_config,
            probe_config,
            terminal_config,
            logger=logger,
        )

    except PingscopeError as err:
        await write(f"Error: {err}", stream=sys.stderr)
        return 1

    finally:
        await logger.close()

    await write("Exited.")

    return 0


def run():
    sys.exit(run_cli(sys.argv[1:]))
