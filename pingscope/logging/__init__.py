from .models import (
    Entry as Entry,
    Log as Log,
    LogLevel as LogLevel,
    LogLevelName as LogLevelName,
)
from .config import (
    LoggingConfig as LoggingConfig,
    LogLevelMap as LogLevelMap,
    StreamType as StreamType,
)
from .streams import (
    Logger as Logger,
    LoggerContext as LoggerContext,
    LoggerStream as LoggerStream,
)
from .pingscope_logging_models import (
    PipelineDebug as PipelineDebug,
    PipelineInfo as PipelineInfo,
    ProbeError as ProbeError,
    ProbeInfo as ProbeInfo,
)
