"""Symbol generator and shape renderer built on ``qrcode``.

``generate()`` picks the smallest QR version that fits the payload;
``render()`` paints the modules with a shape-specific drawer and scales
the raster to the requested fit rule.
"""

from __future__ import annotations

import logging
from typing import Any

import qrcode
from PIL import Image, ImageDraw
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.image.styledpil import StyledPilImage
from qrcode.image.styles.moduledrawers.pil import (
    CircleModuleDrawer,
    HorizontalBarsDrawer,
    RoundedModuleDrawer,
    SquareModuleDrawer,
    StyledPilQRModuleDrawer,
    VerticalBarsDrawer,
)

from qrctl.domain.types import Shape, SizeSpec

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS: dict[str, int] = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class DiamondModuleDrawer(StyledPilQRModuleDrawer):
    """Draws each active module as a square rotated by 45 degrees."""

    def initialize(self, *args: Any, **kwargs: Any) -> None:
        super().initialize(*args, **kwargs)
        self.imgDraw = ImageDraw.Draw(self.img._img)

    def drawrect(self, box: Any, is_active: bool) -> None:
        if not is_active:
            return
        (x0, y0), (x1, y1) = box
        cx = (x0 + x1) / 2
        cy = (y0 + y1) / 2
        self.imgDraw.polygon(
            [(cx, y0), (x1, cy), (cx, y1), (x0, cy)],
            fill=self.img.paint_color,
        )


def module_drawer(shape: Shape) -> StyledPilQRModuleDrawer:
    """Return a fresh drawer instance for *shape*."""
    match shape:
        case Shape.SQUARE:
            return SquareModuleDrawer()
        case Shape.CIRCLE:
            return CircleModuleDrawer()
        case Shape.ROUNDED_SQUARE:
            return RoundedModuleDrawer()
        case Shape.VERTICAL:
            return VerticalBarsDrawer()
        case Shape.HORIZONTAL:
            return HorizontalBarsDrawer()
        case Shape.DIAMOND:
            return DiamondModuleDrawer()


def generate(
    payload: bytes,
    *,
    error_correction: str = "Q",
    border: int = 4,
) -> qrcode.QRCode:
    """Build a QR symbol for *payload*.

    Raises:
        qrcode.exceptions.DataOverflowError: payload exceeds version 40.
        ValueError: payload or parameters rejected by the generator.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION_LEVELS[error_correction],
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    logger.debug("generated QR version %s (%d modules)", qr.version, qr.modules_count)
    return qr


def render(
    qr: qrcode.QRCode,
    shape: Shape,
    size: SizeSpec,
    *,
    square_eyes: bool = True,
) -> Image.Image:
    """Paint *qr* with *shape* and fit it to *size*.

    The symbol stays square: for a two-sided fit it is scaled to the
    shorter side and centred on a white canvas of the requested size.
    """
    target_w, target_h = size.target()
    side = min(target_w, target_h)
    total = qr.modules_count + 2 * qr.border
    qr.box_size = max(1, side // total)

    drawer = module_drawer(shape)
    eye_drawer = SquareModuleDrawer() if square_eyes else module_drawer(shape)
    styled = qr.make_image(
        image_factory=StyledPilImage,
        module_drawer=drawer,
        eye_drawer=eye_drawer,
    )
    raster: Image.Image = styled.get_image()

    if raster.size != (side, side):
        raster = raster.resize((side, side), Image.Resampling.NEAREST)
    if (target_w, target_h) == (side, side):
        return raster

    canvas = Image.new(raster.mode, (target_w, target_h), "white")
    canvas.paste(raster, ((target_w - side) // 2, (target_h - side) // 2))
    return canvas
