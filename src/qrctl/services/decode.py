"""DecodeService — raster image bytes to QR payload(s).

Pipeline: open container -> luma grid -> find symbols -> decode each in
finder order -> aggregate -> choose text or binary output.

Per-symbol failures abort the call unless ``ignore_errors`` is set, in
which case the symbol is skipped with a warning.
"""

from __future__ import annotations

import logging
from typing import Any

from qrctl.config.models import DecodeConfig
from qrctl.domain.payload import AggregatedResult
from qrctl.domain.sniff import describe_format
from qrctl.infrastructure.imaging import IMAGE_ERRORS, load_luma
from qrctl.infrastructure.scanner import (
    SymbolCandidate,
    SymbolDecodeError,
    SymbolFinder,
    ZXingFinder,
)
from qrctl.services.base import BaseService
from qrctl.services.result import ServiceResult
from qrctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

INCORRECT_DATA = "input contains incorrect data"


class DecodeService(BaseService):
    """Recover payloads from every QR symbol found in an image."""

    op = "decode"

    def __init__(
        self,
        config: DecodeConfig | None = None,
        *,
        finder: SymbolFinder | None = None,
    ) -> None:
        self._config = config or DecodeConfig()
        self._finder = finder or ZXingFinder(
            try_rotate=self._config.try_rotate,
            try_downscale=self._config.try_downscale,
            report_unreadable=self._config.report_unreadable,
        )

    @traced
    def decode(self, data: bytes, *, ignore_errors: bool | None = None) -> ServiceResult:
        """Decode all symbols in *data*.

        Args:
            data: Encoded image in any container Pillow can read.
            ignore_errors: Skip unreadable symbols instead of failing.
                Defaults to the ``[decode] ignore_errors`` setting.

        Returns ``data={"kind", "payload", "symbols", "skipped"}`` where
        ``payload`` is ``str`` for ``kind="text"`` and ``bytes`` for
        ``kind="binary"``.
        """
        if ignore_errors is None:
            ignore_errors = self._config.ignore_errors
        warnings: list[str] = []

        with trace_span("open_image") as span:
            try:
                grid = load_luma(data)
            except IMAGE_ERRORS as exc:
                guessed = describe_format(data)
                return ServiceResult.failure(
                    self.op,
                    code="IMAGE_OPEN_FAILED",
                    label="unable to open image",
                    message=f"Input is guessed as {guessed}: {exc}",
                    source="input",
                    detail={"format": guessed, "cause": str(exc)},
                )
            if span:
                span.annotate("size", f"{grid.width}x{grid.height}")

        aggregate = AggregatedResult()
        skipped = 0
        with trace_span("scan") as span:
            for index, candidate in enumerate(self._finder.identify(grid)):
                failure = _read_candidate(candidate, aggregate)
                if failure is None:
                    continue
                if not ignore_errors:
                    return ServiceResult.failure(
                        self.op,
                        code="INCORRECT_DATA",
                        label=INCORRECT_DATA,
                        message=failure,
                        source="input",
                        detail=_candidate_detail(index, candidate),
                    )
                skipped += 1
                self._warn(warnings, f"Ignore error while decoding symbol {index}: {failure}")
            if span:
                span.annotate("symbols", len(aggregate))
                span.annotate("skipped", skipped)

        with trace_span("aggregate"):
            kind, payload = aggregate.render()

        logger.debug("decoded %d symbol(s) as %s", len(aggregate), kind)
        return ServiceResult(
            ok=True,
            op=self.op,
            data={
                "kind": str(kind),
                "payload": payload,
                "symbols": len(aggregate),
                "skipped": skipped,
            },
            warnings=warnings,
        )


def _read_candidate(candidate: SymbolCandidate, aggregate: AggregatedResult) -> str | None:
    """Append the candidate's payload, or return a failure description."""
    if not candidate.identified:
        return f"part of data can not be identified: {candidate.identify_error}"
    try:
        payload = candidate.decode()
    except SymbolDecodeError as exc:
        return f"identified data can not be decoded: {exc}"
    aggregate.append(payload)
    return None


def _candidate_detail(index: int, candidate: SymbolCandidate) -> dict[str, Any]:
    detail: dict[str, Any] = {"index": index}
    if candidate.location is not None:
        detail["location"] = list(candidate.location)
    return detail


def decode(data: bytes, *, ignore_errors: bool = False) -> ServiceResult:
    """Decode *data* with default configuration."""
    return DecodeService().decode(data, ignore_errors=ignore_errors)
