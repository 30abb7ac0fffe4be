"""Command: decode QR symbols from an image."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

import click

from qrctl.commands._base import QrCommand

if TYPE_CHECKING:
    from qrctl.commands._context import AppContext


@click.command(
    cls=QrCommand,
    examples="""\
  qrctl decode qrcode.png
  cat qrcode.png | qrctl decode
  qrctl decode --ignore-error scan.jpg
  qrctl decode photo.png -o payload.bin
  qrctl --json decode qrcode.png""",
)
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "-i",
    "--ignore-error",
    is_flag=True,
    help="Ignore errors if some parts are decodable.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the payload to a file instead of stdout.",
)
@click.pass_obj
def decode(app: AppContext, source: BinaryIO, ignore_error: bool, output: Path | None) -> None:
    """Decode the QR code(s) in SOURCE (default: stdin).

    Prints text when every symbol holds valid UTF-8 (one line per symbol),
    otherwise the raw concatenated bytes.
    """
    from qrctl.services.decode import DecodeService

    svc = DecodeService(app.settings.decode)
    result = svc.decode(
        source.read(),
        ignore_errors=ignore_error or app.settings.decode.ignore_errors,
    )
    app.emit_payload(result, "payload", output)
