from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    StrictBytes,
    ValidationError,
    confloat,
    conint,
)

from pingscope.core.errors import ConfigurationError


class ProbeConfig(BaseModel):
    ip_version: Literal[4, 6] = 4
    interval: confloat(ge=0.01) = 0.2
    timeout: confloat(ge=0.1) = 3.0
    buffer_size: conint(gt=0) = 100
    payload: StrictBytes = b"pingscope"

    @classmethod
    def create(cls, **kwargs: Any) -> ProbeConfig:
        try:
            return cls(**kwargs)

        except ValidationError as err:
            raise ConfigurationError(f"Invalid probe configuration - {err}") from err
