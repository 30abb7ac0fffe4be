"""Shape name resolution.

Names are matched case-insensitively against a fixed table; there is no
fuzzy or prefix matching.
"""

from __future__ import annotations

from qrctl.domain.types import SHAPE_DISPLAY_NAMES, Shape

_SHAPES_BY_NAME: dict[str, Shape] = {
    "SQUARE": Shape.SQUARE,
    "CIRCLE": Shape.CIRCLE,
    "ROUNDEDSQUARE": Shape.ROUNDED_SQUARE,
    "VERTICAL": Shape.VERTICAL,
    "HORIZONTAL": Shape.HORIZONTAL,
    "DIAMOND": Shape.DIAMOND,
}

ALLOWED_SHAPES = ", ".join(SHAPE_DISPLAY_NAMES.values())


class UnknownShapeError(ValueError):
    """Raised for a shape name outside the supported set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"should be one of {ALLOWED_SHAPES}")


def resolve_shape(name: str | None) -> Shape:
    """Map an optional user-supplied shape name to a :class:`Shape`.

    Examples:
        >>> resolve_shape(None)
        <Shape.SQUARE: 'square'>
        >>> resolve_shape("roundedSquare")
        <Shape.ROUNDED_SQUARE: 'roundedsquare'>
    """
    if not name:
        return Shape.SQUARE
    shape = _SHAPES_BY_NAME.get(name.upper())
    if shape is None:
        raise UnknownShapeError(name)
    return shape
