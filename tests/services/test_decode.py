"""Tests for DecodeService — aggregation and error policy."""

from __future__ import annotations

import json

import pytest

from qrctl.config.models import DecodeConfig
from qrctl.services.decode import DecodeService, decode
from tests.conftest import (
    FakeFinder,
    make_qr_png,
    readable,
    side_by_side,
    undecodable,
    unidentified,
)


def _service(*candidates: object, **config: object) -> DecodeService:
    return DecodeService(DecodeConfig(**config), finder=FakeFinder(candidates))  # type: ignore[arg-type]


class TestImageOpen:
    def test_garbage_input_fails(self) -> None:
        result = DecodeService().decode(b"not an image at all")
        assert result.ok is False
        assert result.op == "decode"
        assert result.error is not None
        assert result.error.code == "IMAGE_OPEN_FAILED"
        assert result.error.label == "unable to open image"
        assert "unknown (unknown extension)" in result.error.message
        assert result.error.source == "input"

    def test_broken_png_names_guessed_format(self) -> None:
        result = DecodeService().decode(b"\x89PNG\r\n\x1a\nbroken")
        assert result.ok is False
        assert result.error is not None
        assert "image/png (png)" in result.error.message
        assert result.error.detail["format"] == "image/png (png)"

    def test_open_failure_skips_finder(self) -> None:
        finder = FakeFinder([readable(b"never")])
        result = DecodeService(finder=finder).decode(b"")
        assert result.ok is False
        assert finder.grids == []

    def test_finder_receives_full_luma_grid(self, blank_png: bytes) -> None:
        finder = FakeFinder([])
        DecodeService(finder=finder).decode(blank_png)
        (grid,) = finder.grids
        assert (grid.width, grid.height) == (64, 64)
        assert len(grid.samples) == 64 * 64


class TestAggregation:
    def test_zero_symbols_is_empty_text(self, blank_png: bytes) -> None:
        # Preserved quirk: no symbols yields empty *text*, not an error.
        result = _service().decode(blank_png)
        assert result.ok is True
        assert result.data["kind"] == "text"
        assert result.data["payload"] == ""
        assert result.data["symbols"] == 0

    def test_single_text_symbol(self, blank_png: bytes) -> None:
        result = _service(readable(b"hello")).decode(blank_png)
        assert result.data["kind"] == "text"
        assert result.data["payload"] == "hello"

    def test_multi_symbol_order_and_newline(self, blank_png: bytes) -> None:
        result = _service(readable(b"A"), readable(b"B")).decode(blank_png)
        assert result.data["payload"] == "A\nB"
        assert result.data["symbols"] == 2

    def test_mixed_types_concatenate_as_binary(self, blank_png: bytes) -> None:
        result = _service(readable(b"text"), readable(b"\xff\x00\xfe")).decode(blank_png)
        assert result.data["kind"] == "binary"
        assert result.data["payload"] == b"text\xff\x00\xfe"

    def test_binary_first_then_text(self, blank_png: bytes) -> None:
        result = _service(readable(b"\x80"), readable(b"tail")).decode(blank_png)
        assert result.data["kind"] == "binary"
        assert result.data["payload"] == b"\x80tail"

    def test_binary_payload_serializes_as_base64(self, blank_png: bytes) -> None:
        result = _service(readable(b"\x80")).decode(blank_png)
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["payload"] == "gA=="


class TestErrorPolicy:
    def test_unidentified_fails_fast(self, blank_png: bytes) -> None:
        result = _service(readable(b"ok"), unidentified("Format: nope")).decode(blank_png)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "INCORRECT_DATA"
        assert result.error.label == "input contains incorrect data"
        assert result.error.message == "part of data can not be identified: Format: nope"
        assert result.error.detail["index"] == 1

    def test_undecodable_fails_fast(self, blank_png: bytes) -> None:
        result = _service(undecodable("Checksum: ecc")).decode(blank_png)
        assert result.ok is False
        assert result.error is not None
        assert result.error.message == "identified data can not be decoded: Checksum: ecc"
        assert result.error.detail["location"] == [10, 20]

    def test_no_partial_output_on_failure(self, blank_png: bytes) -> None:
        result = _service(readable(b"ok"), undecodable()).decode(blank_png)
        assert result.ok is False
        assert result.data == {}

    def test_ignore_keeps_valid_payloads(self, blank_png: bytes) -> None:
        svc = _service(readable(b"valid"), undecodable(), unidentified())
        result = svc.decode(blank_png, ignore_errors=True)
        assert result.ok is True
        assert result.data["kind"] == "text"
        assert result.data["payload"] == "valid"
        assert result.data["skipped"] == 2
        assert len(result.warnings) == 2
        assert all("Ignore error while decoding" in w for w in result.warnings)

    def test_ignore_all_failing_is_empty_text(self, blank_png: bytes) -> None:
        result = _service(undecodable(), unidentified()).decode(blank_png, ignore_errors=True)
        assert result.ok is True
        assert result.data["kind"] == "text"
        assert result.data["payload"] == ""

    def test_config_default_for_ignore(self, blank_png: bytes) -> None:
        svc = _service(undecodable(), readable(b"x"), ignore_errors=True)
        result = svc.decode(blank_png)
        assert result.ok is True
        assert result.data["payload"] == "x"

    def test_explicit_flag_overrides_config(self, blank_png: bytes) -> None:
        svc = _service(undecodable(), ignore_errors=True)
        assert svc.decode(blank_png, ignore_errors=False).ok is False


class TestRealImages:
    def test_round_trip_text(self) -> None:
        result = decode(make_qr_png(b"hello!"))
        assert result.ok is True
        assert result.data == {"kind": "text", "payload": "hello!", "symbols": 1, "skipped": 0}

    def test_round_trip_unicode(self) -> None:
        text = "Grüße, 世界 ✓"
        result = decode(make_qr_png(text.encode("utf-8")))
        assert result.data["payload"] == text

    def test_round_trip_binary(self) -> None:
        payload = b"\xff\xfe\xfd\x00\x80binary"
        result = decode(make_qr_png(payload))
        assert result.ok is True
        assert result.data["kind"] == "binary"
        assert result.data["payload"] == payload

    def test_two_symbols_in_one_image(self) -> None:
        image = side_by_side(
            make_qr_png(b"alpha", width=300),
            make_qr_png(b"beta", width=300),
        )
        result = decode(image)
        assert result.ok is True
        assert result.data["kind"] == "text"
        assert result.data["payload"] == "alpha\nbeta"
        assert result.data["skipped"] == 0

    def test_blank_image_is_empty_text(self, blank_png: bytes) -> None:
        result = decode(blank_png)
        assert result.ok is True
        assert result.data["payload"] == ""

    @pytest.mark.parametrize("fmt", ["JPEG", "BMP", "GIF"])
    def test_other_containers(self, fmt: str) -> None:
        import io

        from PIL import Image

        image = Image.open(io.BytesIO(make_qr_png(b"container"))).convert("RGB")
        buf = io.BytesIO()
        image.save(buf, format=fmt)
        result = decode(buf.getvalue())
        assert result.data["payload"] == "container"
