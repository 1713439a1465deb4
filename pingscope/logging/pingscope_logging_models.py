from .models import Entry, LogLevel


class PipelineInfo(Entry, kw_only=True):
    targets: list[str]
    history_capacity: int
    refresh_interval: float
    level: LogLevel = LogLevel.INFO


class PipelineDebug(Entry, kw_only=True):
    target: str
    history_length: int
    packets_sent: int
    level: LogLevel = LogLevel.DEBUG


class ProbeInfo(Entry, kw_only=True):
    target: str
    address: str
    level: LogLevel = LogLevel.INFO


class ProbeError(Entry, kw_only=True):
    target: str
    error: str
    level: LogLevel = LogLevel.ERROR
