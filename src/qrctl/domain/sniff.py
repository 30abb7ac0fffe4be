"""Best-guess image container detection from leading magic bytes.

Only used to enrich diagnostics when the image codec rejects the input;
a match here does not mean the payload is decodable.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageFormat:
    """A recognised container: MIME type plus conventional extensions."""

    mime: str
    extensions: tuple[str, ...]

    def label(self) -> str:
        if not self.extensions:
            return f"{self.mime} (unknown extension)"
        return f"{self.mime} ({', '.join(self.extensions)})"


UNKNOWN = ImageFormat(mime="unknown", extensions=())

_SIGNATURES: list[tuple[bytes, ImageFormat]] = [
    (b"\x89PNG\r\n\x1a\n", ImageFormat("image/png", ("png",))),
    (b"\xff\xd8\xff", ImageFormat("image/jpeg", ("jpg", "jpeg"))),
    (b"GIF89a", ImageFormat("image/gif", ("gif",))),
    (b"GIF87a", ImageFormat("image/gif", ("gif",))),
    (b"MM\x00*", ImageFormat("image/tiff", ("tiff", "tif"))),
    (b"II*\x00", ImageFormat("image/tiff", ("tiff", "tif"))),
    (b"DDS ", ImageFormat("image/vnd-ms.dds", ("dds",))),
    (b"BM", ImageFormat("image/bmp", ("bmp",))),
    (b"\x00\x00\x01\x00", ImageFormat("image/x-icon", ("ico",))),
    (b"#?RADIANCE", ImageFormat("image/vnd.radiance", ("hdr",))),
    (b"v/1\x01", ImageFormat("image/x-exr", ("exr",))),
    (b"farbfeld", ImageFormat("application/octet-stream", ("ff",))),
    (b"qoif", ImageFormat("image/x-qoi", ("qoi",))),
]

_PNM = ImageFormat("image/x-portable-anymap", ("pbm", "pam", "ppm", "pgm"))
_WEBP = ImageFormat("image/webp", ("webp",))
_AVIF = ImageFormat("image/avif", ("avif",))


def guess_format(data: bytes) -> ImageFormat:
    """Return the container format suggested by *data*'s header, or :data:`UNKNOWN`."""
    for magic, fmt in _SIGNATURES:
        if data.startswith(magic):
            return fmt
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return _WEBP
    if data[4:12] == b"ftypavif":
        return _AVIF
    if len(data) >= 2 and data[0:1] == b"P" and data[1:2] in b"1234567":
        return _PNM
    return UNKNOWN


def describe_format(data: bytes) -> str:
    """Human-readable format guess, e.g. ``"image/png (png)"``."""
    return guess_format(data).label()
