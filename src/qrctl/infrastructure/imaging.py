"""Pillow adapter: container decoding, luma conversion, PNG serialization."""

from __future__ import annotations

import io

from PIL import Image

from qrctl.domain.types import PixelGrid

# Errors Pillow raises for unreadable, truncated, or oversized containers.
IMAGE_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    EOFError,
    ValueError,
    SyntaxError,
    Image.DecompressionBombError,
)


def load_luma(data: bytes) -> PixelGrid:
    """Decode *data* as a raster image and convert it to an 8-bit luma grid.

    The full pixel payload is read eagerly so truncated files fail here
    rather than inside the finder.
    """
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        gray = image.convert("L")
    return PixelGrid(width=gray.width, height=gray.height, samples=gray.tobytes())


def grid_to_image(grid: PixelGrid) -> Image.Image:
    """Wrap a luma grid back into a Pillow ``L`` image."""
    return Image.frombytes("L", (grid.width, grid.height), grid.samples)


def encode_png(image: Image.Image) -> bytes:
    """Serialize *image* as PNG bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
