"""EncodeService — payload bytes to a styled QR code PNG.

Pipeline: resolve shape and size -> generate symbol -> render with the
shape's module drawer and fit rule -> serialize PNG.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from qrcode.exceptions import DataOverflowError

from qrctl.config.models import EncodeConfig
from qrctl.domain.shapes import ALLOWED_SHAPES, UnknownShapeError, resolve_shape
from qrctl.domain.sizing import InvalidSizeError, SizeTooLargeError, resolve_size
from qrctl.domain.types import SIZE_LIMIT
from qrctl.infrastructure.generator import generate, render
from qrctl.infrastructure.imaging import IMAGE_ERRORS, encode_png
from qrctl.services.base import BaseService
from qrctl.services.result import ServiceResult
from qrctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class EncodeService(BaseService):
    """Turn arbitrary bytes into a PNG QR code image."""

    op = "encode"

    def __init__(self, config: EncodeConfig | None = None) -> None:
        self._config = config or EncodeConfig()

    @traced
    def encode(
        self,
        payload: bytes,
        *,
        shape: str | None = None,
        width: int | None = None,
        height: int | None = None,
        background: Sequence[int] | None = None,
    ) -> ServiceResult:
        """Encode *payload* as a PNG QR code.

        Args:
            payload: Bytes to embed. Text callers pass its UTF-8 encoding.
            shape: Case-insensitive shape name; the ``[encode] shape``
                setting when omitted.
            width: Target width in pixels.
            height: Target height in pixels.
            background: Reserved; accepted but not applied.
        """
        warnings: list[str] = []

        try:
            resolved_shape = resolve_shape(shape) if shape else self._config.shape
        except UnknownShapeError as exc:
            return ServiceResult.failure(
                self.op,
                code="UNKNOWN_SHAPE",
                label="unknown shape parameter",
                message=str(exc),
                source="shape",
                detail={"value": exc.name, "allowed": ALLOWED_SHAPES.split(", ")},
            )

        try:
            size = resolve_size(width, height, default_width=self._config.width)
        except SizeTooLargeError as exc:
            return ServiceResult.failure(
                self.op,
                code="SIZE_TOO_LARGE",
                label="invalid width/height: too large",
                message=str(exc),
                source=exc.param,
                detail={"value": exc.value, "limit": SIZE_LIMIT},
            )
        except InvalidSizeError as exc:
            return ServiceResult.failure(
                self.op,
                code="INVALID_SIZE",
                label="invalid width/height",
                message=str(exc),
                source=exc.param,
                detail={"value": exc.value},
            )

        if background is not None:
            self._warn(warnings, "background color is reserved and was not applied")

        with trace_span("generate") as span:
            try:
                qr = generate(
                    payload,
                    error_correction=self._config.error_correction,
                    border=self._config.border,
                )
            except (DataOverflowError, ValueError) as exc:
                return ServiceResult.failure(
                    self.op,
                    code="QR_GENERATION_FAILED",
                    label="failed to generate qr code",
                    message=str(exc) or type(exc).__name__,
                    source="input",
                    detail={"payload_size": len(payload)},
                )
            if span:
                span.annotate("version", qr.version)

        try:
            with trace_span("render"):
                image = render(qr, resolved_shape, size, square_eyes=self._config.square_eyes)
            with trace_span("serialize"):
                png = encode_png(image)
        except (*IMAGE_ERRORS, MemoryError, OverflowError) as exc:
            return ServiceResult.failure(
                self.op,
                code="PNG_ENCODING_FAILED",
                label="failed to generate png",
                message=str(exc) or type(exc).__name__,
                detail={"size_spec": size.to_dict()},
            )

        logger.debug(
            "encoded %d byte(s) as %dx%d %s symbol",
            len(payload),
            image.width,
            image.height,
            resolved_shape,
        )
        return ServiceResult(
            ok=True,
            op=self.op,
            data={
                "png": png,
                "shape": resolved_shape.display_name,
                "width": image.width,
                "height": image.height,
                "version": qr.version,
                "size_spec": size.to_dict(),
            },
            warnings=warnings,
        )


def encode(
    payload: bytes,
    *,
    shape: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> ServiceResult:
    """Encode *payload* with default configuration."""
    return EncodeService().encode(payload, shape=shape, width=width, height=height)
