from .time_window import (
    OFF_LEFT_EDGE as OFF_LEFT_EDGE,
    OFF_RIGHT_EDGE as OFF_RIGHT_EDGE,
    TimeWindow as TimeWindow,
)
