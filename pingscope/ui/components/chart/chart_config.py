from pydantic import (
    BaseModel,
    StrictFloat,
    StrictInt,
    StrictStr,
    confloat,
    conint,
)


class ChartConfig(BaseModel):
    min_chart_width: conint(gt=0) = 20
    min_chart_height: conint(gt=0) = 5
    max_chart_size: conint(gt=0) = 1000
    value_buffer_ratio: confloat(ge=0) = 0.1
    value_floor: StrictInt | StrictFloat = 0
    y_axis_label_count: conint(gt=0) = 5
    time_format: StrictStr = "%H:%M:%S"
    axis_color: StrictStr = "gray"
    default_line_color: StrictStr = "white"
