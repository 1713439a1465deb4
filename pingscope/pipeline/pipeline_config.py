from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ValidationError,
    confloat,
    conint,
    model_validator,
)

from pingscope.core.errors import ConfigurationError
from pingscope.ui.components.chart import ChartConfig


class PipelineConfig(BaseModel):
    history_capacity: conint(ge=10, le=1000) = 150
    refresh_interval: confloat(ge=0.01) = 0.2
    maintenance_interval: confloat(ge=0.01) = 0.2
    timeout_buffer_ratio: confloat(ge=1.0) = 1.2
    value_buffer_ratio: confloat(ge=0) = 0.1
    min_chart_width: conint(gt=0) = 20
    min_chart_height: conint(gt=0) = 5
    max_chart_size: conint(gt=0) = 1000
    max_interpolation_steps: conint(gt=0) | None = None

    @model_validator(mode="after")
    def validate_chart_bounds(self) -> PipelineConfig:
        if self.min_chart_width > self.max_chart_size:
            raise ValueError("min_chart_width cannot exceed max_chart_size")

        if self.min_chart_height > self.max_chart_size:
            raise ValueError("min_chart_height cannot exceed max_chart_size")

        return self

    @classmethod
    def create(cls, **kwargs: Any) -> PipelineConfig:
        try:
            return cls(**kwargs)

        except ValidationError as err:
            raise ConfigurationError(
                f"Invalid pipeline configuration - {err}"
            ) from err

    @property
    def window_span(self) -> float:
        """Seconds of history visible on the chart once it starts rolling."""
        return self.history_capacity * self.maintenance_interval

    @property
    def interpolation_limit(self) -> int:
        if self.max_interpolation_steps is None:
            return self.history_capacity

        return self.max_interpolation_steps

    def timeout_threshold(self, probe_timeout: float) -> float:
        return probe_timeout * self.timeout_buffer_ratio

    def to_chart_config(self) -> ChartConfig:
        return ChartConfig(
            min_chart_width=self.min_chart_width,
            min_chart_height=self.min_chart_height,
            max_chart_size=self.max_chart_size,
            value_buffer_ratio=self.value_buffer_ratio,
        )
