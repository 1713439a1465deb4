from .braille_canvas import BrailleCanvas as BrailleCanvas
from .chart_config import ChartConfig as ChartConfig
from .latency_chart import (
    LatencyChart as LatencyChart,
    RenderMessage as RenderMessage,
)
from .value_range import (
    ValueRange as ValueRange,
    compute_value_range as compute_value_range,
)
