"""Shared pytest fixtures and test helpers for qrctl tests."""

from __future__ import annotations

import io
import logging
from collections.abc import Generator, Iterable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image

from qrctl.domain.types import PixelGrid
from qrctl.infrastructure.scanner import SymbolCandidate
from qrctl.services.encode import EncodeService
from qrctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test (--verbose enables it)."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (AppContext reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    qr = logging.getLogger("qrctl")
    qr_level = qr.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    qr.setLevel(qr_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no qrctl config or env overrides."""
    monkeypatch.chdir(tmp_path)
    for name in ("QRCTL_CONFIG", "QRCTL_JSON_OUTPUT", "QRCTL_VERBOSE", "QRCTL_QUIET"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def blank_png() -> bytes:
    """A valid white PNG with no symbols."""
    return png_bytes(Image.new("L", (64, 64), 255))


@pytest.fixture
def hello_png() -> bytes:
    """A single-symbol QR image holding ``hello!``."""
    return make_qr_png(b"hello!")


# ---------------------------------------------------------------------------
# Shared test helpers (used across test modules)
# ---------------------------------------------------------------------------


class FakeFinder:
    """Symbol finder returning a fixed candidate list, in order."""

    def __init__(self, candidates: Iterable[SymbolCandidate]) -> None:
        self.candidates = list(candidates)
        self.grids: list[PixelGrid] = []

    def identify(self, grid: PixelGrid) -> Iterator[SymbolCandidate]:
        self.grids.append(grid)
        yield from self.candidates


def readable(payload: bytes) -> SymbolCandidate:
    return SymbolCandidate(payload=payload, location=(0, 0))


def unidentified(diagnostic: str = "Format: bad finder") -> SymbolCandidate:
    return SymbolCandidate(identify_error=diagnostic)


def undecodable(diagnostic: str = "Checksum: too many errors") -> SymbolCandidate:
    return SymbolCandidate(decode_error=diagnostic, location=(10, 20))


def png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def make_qr_png(payload: bytes, **kwargs: object) -> bytes:
    """Encode *payload* through EncodeService, asserting success."""
    result = EncodeService().encode(payload, **kwargs)  # type: ignore[arg-type]
    assert result.ok, result.error
    return result.data["png"]


def side_by_side(*images: bytes, gap: int = 40) -> bytes:
    """Paste PNG images left-to-right on a white canvas."""
    opened = [Image.open(io.BytesIO(data)).convert("RGB") for data in images]
    width = sum(img.width for img in opened) + gap * (len(opened) + 1)
    height = max(img.height for img in opened) + 2 * gap
    canvas = Image.new("RGB", (width, height), "white")
    x = gap
    for img in opened:
        canvas.paste(img, (x, gap))
        x += img.width + gap
    return png_bytes(canvas)
