"""Tests for the decode CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from qrctl.cli import cli
from tests.conftest import make_qr_png, side_by_side


@pytest.mark.usefixtures("_isolated_cwd")
class TestDecodeCommand:
    def test_decode_stdin_text(self, cli_runner: CliRunner, hello_png: bytes) -> None:
        result = cli_runner.invoke(cli, ["decode"], input=hello_png)
        assert result.exit_code == 0, result.stderr
        assert result.stdout == "hello!\n"

    def test_decode_file_argument(
        self, cli_runner: CliRunner, hello_png: bytes, tmp_path: Path
    ) -> None:
        path = tmp_path / "qr.png"
        path.write_bytes(hello_png)
        result = cli_runner.invoke(cli, ["decode", str(path)])
        assert result.exit_code == 0
        assert result.stdout == "hello!\n"

    def test_decode_binary_has_no_newline(self, cli_runner: CliRunner) -> None:
        payload = b"\x00\x9f\xfe binary"
        result = cli_runner.invoke(cli, ["decode"], input=make_qr_png(payload))
        assert result.exit_code == 0
        assert result.stdout_bytes == payload

    def test_decode_two_symbols_one_line_each(self, cli_runner: CliRunner) -> None:
        image = side_by_side(make_qr_png(b"left", width=300), make_qr_png(b"right", width=300))
        result = cli_runner.invoke(cli, ["decode"], input=image)
        assert result.exit_code == 0
        assert result.stdout == "left\nright\n"

    def test_decode_blank_image_prints_empty_text(
        self, cli_runner: CliRunner, blank_png: bytes
    ) -> None:
        result = cli_runner.invoke(cli, ["decode"], input=blank_png)
        assert result.exit_code == 0
        assert result.stdout == "\n"

    def test_decode_output_file(
        self, cli_runner: CliRunner, hello_png: bytes, tmp_path: Path
    ) -> None:
        out = tmp_path / "payload.txt"
        result = cli_runner.invoke(cli, ["decode", "-o", str(out)], input=hello_png)
        assert result.exit_code == 0
        assert out.read_bytes() == b"hello!"
        assert "OK" in result.stdout
        assert "kind: text" in result.stdout

    def test_decode_output_file_quiet(
        self, cli_runner: CliRunner, hello_png: bytes, tmp_path: Path
    ) -> None:
        out = tmp_path / "payload.txt"
        result = cli_runner.invoke(cli, ["-q", "decode", "-o", str(out)], input=hello_png)
        assert result.exit_code == 0
        assert result.stdout == ""
        assert out.read_bytes() == b"hello!"

    def test_decode_json(self, cli_runner: CliRunner, hello_png: bytes) -> None:
        result = cli_runner.invoke(cli, ["--json", "decode"], input=hello_png)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "decode"
        assert data["data"]["kind"] == "text"
        assert data["data"]["payload"] == "hello!"
        assert data["data"]["symbols"] == 1

    def test_verbose_summary_on_stderr(self, cli_runner: CliRunner, hello_png: bytes) -> None:
        result = cli_runner.invoke(cli, ["--verbose", "decode"], input=hello_png)
        assert result.exit_code == 0
        assert result.stdout == "hello!\n"
        assert "symbols: 1" in result.stderr


@pytest.mark.usefixtures("_isolated_cwd")
class TestDecodeErrors:
    def test_not_an_image(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["decode"], input=b"definitely not an image")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "unable to open image" in result.stderr
        assert "Input is guessed as" in result.stderr

    def test_not_an_image_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "decode"], input=b"\x89PNG\r\n\x1a\ngarbage")
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["ok"] is False
        assert payload["error"]["code"] == "IMAGE_OPEN_FAILED"
        assert "image/png" in payload["error"]["message"]

    def test_missing_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["decode", "does-not-exist.png"])
        assert result.exit_code == 2


def test_decode_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["decode", "--examples"])
    assert result.exit_code == 0
    assert "qrctl decode --ignore-error" in result.output
