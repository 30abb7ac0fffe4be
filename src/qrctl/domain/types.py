"""Value types shared by the decode and encode pipelines.

Every type here lives for a single command invocation and is never
persisted or shared across calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# Exclusive upper bound for target raster dimensions (u32::MAX).
SIZE_LIMIT = 4294967295

DEFAULT_WIDTH = 600


class Shape(StrEnum):
    """Module rendering styles for generated symbols."""

    SQUARE = "square"
    CIRCLE = "circle"
    ROUNDED_SQUARE = "roundedsquare"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    DIAMOND = "diamond"

    @property
    def display_name(self) -> str:
        return SHAPE_DISPLAY_NAMES[self]


SHAPE_DISPLAY_NAMES: dict[Shape, str] = {
    Shape.SQUARE: "Square",
    Shape.CIRCLE: "Circle",
    Shape.ROUNDED_SQUARE: "RoundedSquare",
    Shape.VERTICAL: "Vertical",
    Shape.HORIZONTAL: "Horizontal",
    Shape.DIAMOND: "Diamond",
}


class FitRule(StrEnum):
    """Which target dimensions constrain the rendered raster."""

    WIDTH = "width"
    HEIGHT = "height"
    BOTH = "both"


class OutputKind(StrEnum):
    """Representation chosen for an aggregated decode result."""

    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class SizeSpec:
    """Resolved fit rule for the rendered image.

    ``width`` is set for WIDTH and BOTH, ``height`` for HEIGHT and BOTH.
    """

    rule: FitRule
    width: int | None = None
    height: int | None = None

    @classmethod
    def fit_width(cls, width: int) -> SizeSpec:
        return cls(rule=FitRule.WIDTH, width=width)

    @classmethod
    def fit_height(cls, height: int) -> SizeSpec:
        return cls(rule=FitRule.HEIGHT, height=height)

    @classmethod
    def fit_both(cls, width: int, height: int) -> SizeSpec:
        return cls(rule=FitRule.BOTH, width=width, height=height)

    @classmethod
    def default(cls) -> SizeSpec:
        return cls.fit_width(DEFAULT_WIDTH)

    def __post_init__(self) -> None:
        needs_width = self.rule in (FitRule.WIDTH, FitRule.BOTH)
        needs_height = self.rule in (FitRule.HEIGHT, FitRule.BOTH)
        if (self.width is None) == needs_width or (self.height is None) == needs_height:
            msg = (
                f"Fit rule {self.rule} does not match dimensions "
                f"width={self.width} height={self.height}"
            )
            raise ValueError(msg)

    def target(self) -> tuple[int, int]:
        """Return the ``(width, height)`` of the final canvas.

        Symbols are square, so a single constrained side fixes both.
        """
        width = self.width if self.width is not None else self.height
        height = self.height if self.height is not None else self.width
        if width is None or height is None:
            msg = f"Fit rule {self.rule} has no dimensions"
            raise ValueError(msg)
        return width, height

    def to_dict(self) -> dict[str, int | str]:
        data: dict[str, int | str] = {"rule": str(self.rule)}
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        return data


@dataclass(frozen=True)
class PixelGrid:
    """Single-channel (luma) samples in row-major order."""

    width: int
    height: int
    samples: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            msg = f"Grid dimensions must be non-negative, got {self.width}x{self.height}"
            raise ValueError(msg)
        if self.width * self.height != len(self.samples):
            msg = (
                f"Grid {self.width}x{self.height} needs {self.width * self.height} "
                f"samples, got {len(self.samples)}"
            )
            raise ValueError(msg)
