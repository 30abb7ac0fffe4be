"""Symbol finder — zxing-cpp wrapper yielding per-symbol candidates.

Each candidate is either located (and decodable, or not) or an
identification failure. The finder never raises for a bad symbol; it
reports it as a candidate so the caller can apply its own error policy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

import zxingcpp

from qrctl.domain.types import PixelGrid
from qrctl.infrastructure.imaging import grid_to_image

logger = logging.getLogger(__name__)


class SymbolDecodeError(Exception):
    """A located symbol whose data could not be recovered."""


@dataclass(frozen=True)
class SymbolCandidate:
    """One finder result.

    Attributes:
        payload: Recovered bytes for a readable symbol.
        identify_error: Diagnostic when the symbol could not be identified.
        decode_error: Diagnostic when an identified symbol failed to decode.
        location: Top-left corner of the symbol in grid coordinates, if known.
    """

    payload: bytes | None = None
    identify_error: str | None = None
    decode_error: str | None = None
    location: tuple[int, int] | None = None

    @property
    def identified(self) -> bool:
        return self.identify_error is None

    def decode(self) -> bytes:
        """Return the symbol payload or raise :class:`SymbolDecodeError`."""
        if self.decode_error is not None:
            raise SymbolDecodeError(self.decode_error)
        if self.payload is None:
            raise SymbolDecodeError("symbol carries no payload")
        return self.payload


class SymbolFinder(Protocol):
    """Anything that enumerates symbol candidates over a luma grid."""

    def identify(self, grid: PixelGrid) -> Iterator[SymbolCandidate]: ...


class ZXingFinder:
    """QR finder backed by ``zxingcpp.read_barcodes``.

    With *report_unreadable* enabled, symbols zxing located but could not
    read are surfaced as failed candidates instead of being dropped.
    Checksum failures count as decode errors; format and unsupported-feature
    failures count as identification errors.
    """

    def __init__(
        self,
        *,
        try_rotate: bool = True,
        try_downscale: bool = True,
        report_unreadable: bool = True,
    ) -> None:
        self._try_rotate = try_rotate
        self._try_downscale = try_downscale
        self._report_unreadable = report_unreadable

    def identify(self, grid: PixelGrid) -> Iterator[SymbolCandidate]:
        if grid.width == 0 or grid.height == 0:
            return
        barcodes = zxingcpp.read_barcodes(
            grid_to_image(grid),
            formats=zxingcpp.BarcodeFormat.QRCode,
            try_rotate=self._try_rotate,
            try_downscale=self._try_downscale,
            return_errors=self._report_unreadable,
        )
        logger.debug("zxing reported %d symbol(s)", len(barcodes))
        for barcode in barcodes:
            yield _to_candidate(barcode)


def _location(barcode: Any) -> tuple[int, int] | None:
    position = getattr(barcode, "position", None)
    if position is None:
        return None
    corner = position.top_left
    return int(corner.x), int(corner.y)


def _to_candidate(barcode: Any) -> SymbolCandidate:
    location = _location(barcode)
    if barcode.valid:
        return SymbolCandidate(payload=bytes(barcode.bytes), location=location)

    error = barcode.error
    message = error.message or str(error)
    kind = getattr(error.type, "name", str(error.type))
    diagnostic = f"{kind}: {message}"
    if kind == "Checksum":
        return SymbolCandidate(decode_error=diagnostic, location=location)
    return SymbolCandidate(identify_error=diagnostic, location=location)
