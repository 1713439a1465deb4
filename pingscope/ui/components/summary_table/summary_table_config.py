from pydantic import (
    BaseModel,
    StrictStr,
    conint,
)

from pingscope.core.stats import SUMMARY_KEYS


class SummaryTableConfig(BaseModel):
    target_header: StrictStr = "Target"
    headers: list[StrictStr] = list(SUMMARY_KEYS)
    header_color: StrictStr = "yellow"
    default: StrictStr = "N/A"
    target_column_weight: conint(gt=0) = 2
    minimum_column_width: conint(gt=0) = 8
    selection_marker: StrictStr = ">"
