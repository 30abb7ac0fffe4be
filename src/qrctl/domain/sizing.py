"""Size resolution: optional width/height parameters to a fit rule."""

from __future__ import annotations

from qrctl.domain.types import DEFAULT_WIDTH, SIZE_LIMIT, SizeSpec


class SizeTooLargeError(ValueError):
    """Raised when a target dimension reaches :data:`SIZE_LIMIT`."""

    def __init__(self, param: str, value: int) -> None:
        self.param = param
        self.value = value
        super().__init__(f"width/height should be smaller than {SIZE_LIMIT}")


class InvalidSizeError(ValueError):
    """Raised when a target dimension is zero or negative."""

    def __init__(self, param: str, value: int) -> None:
        self.param = param
        self.value = value
        super().__init__(f"{param} should be a positive integer, got {value}")


def _check(param: str, value: int | None) -> None:
    if value is None:
        return
    if value <= 0:
        raise InvalidSizeError(param, value)
    if value >= SIZE_LIMIT:
        raise SizeTooLargeError(param, value)


def resolve_size(
    width: int | None,
    height: int | None,
    *,
    default_width: int = DEFAULT_WIDTH,
) -> SizeSpec:
    """Resolve optional dimensions into a :class:`SizeSpec`.

    Both given -> fit both; one given -> fit that side; neither ->
    fit *default_width*.
    """
    _check("width", width)
    _check("height", height)

    if width is not None and height is not None:
        return SizeSpec.fit_both(width, height)
    if width is not None:
        return SizeSpec.fit_width(width)
    if height is not None:
        return SizeSpec.fit_height(height)
    return SizeSpec.fit_width(default_width)
