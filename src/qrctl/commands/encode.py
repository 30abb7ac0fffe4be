"""Command: encode a payload as a PNG QR code."""

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
  qrctl encode -t "hello!" -o qr.png
  echo -n "hello!" | qrctl encode > qr.png
  qrctl encode -t "hello!" --shape circle --width 300 -o qr.png
  qrctl encode firmware.bin -w 800 -v 600 -o qr.png""",
)
@click.argument("source", type=click.File("rb"), default="-")
@click.option("-t", "--text", default=None, help="Encode this text instead of reading SOURCE.")
@click.option(
    "-s",
    "--shape",
    default=None,
    help="Square (default), Circle, RoundedSquare, Vertical, Horizontal, Diamond.",
)
@click.option("-w", "--width", type=int, default=None, help="Target width in pixels.")
@click.option("-v", "--height", type=int, default=None, help="Target height in pixels.")
@click.option(
    "-b",
    "--background",
    type=int,
    multiple=True,
    help="Background color components (reserved, not applied yet).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the PNG to a file instead of stdout.",
)
@click.pass_obj
def encode(
    app: AppContext,
    source: BinaryIO,
    text: str | None,
    shape: str | None,
    width: int | None,
    height: int | None,
    background: tuple[int, ...],
    output: Path | None,
) -> None:
    """Encode SOURCE (default: stdin) or --text as a PNG QR code.

    Without --width/--height the image is 600 pixels wide.
    """
    from qrctl.services.encode import EncodeService

    payload = text.encode("utf-8") if text is not None else source.read()
    result = EncodeService(app.settings.encode).encode(
        payload,
        shape=shape,
        width=width,
        height=height,
        background=background or None,
    )
    app.emit_payload(result, "png", output)
