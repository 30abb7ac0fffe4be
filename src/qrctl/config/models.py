"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, qrctl.toml only contains overrides.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from qrctl.domain.shapes import resolve_shape
from qrctl.domain.types import DEFAULT_WIDTH, SIZE_LIMIT, Shape

ErrorCorrection = Literal["L", "M", "Q", "H"]


class EncodeConfig(BaseModel):
    """[encode] section."""

    model_config = {"frozen": True}

    shape: Shape = Shape.SQUARE
    width: int = Field(default=DEFAULT_WIDTH, gt=0, lt=SIZE_LIMIT)
    border: int = Field(default=4, ge=0)
    error_correction: ErrorCorrection = "Q"
    # Keep finder patterns square regardless of the module shape.
    square_eyes: bool = True

    @field_validator("shape", mode="before")
    @classmethod
    def _resolve_shape_name(cls, value: Any) -> Any:
        """Accept shape names case-insensitively, like ``--shape``."""
        if isinstance(value, str) and not isinstance(value, Shape):
            return resolve_shape(value)
        return value


class DecodeConfig(BaseModel):
    """[decode] section."""

    model_config = {"frozen": True}

    ignore_errors: bool = False
    try_rotate: bool = True
    try_downscale: bool = True
    report_unreadable: bool = True
