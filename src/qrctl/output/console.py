"""Rich Console factory and theme for qrctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

QR_THEME = Theme(
    {
        "qr.ok": "bold green",
        "qr.error": "bold red",
        "qr.warning": "bold yellow",
        "qr.op": "bold cyan",
        "qr.key": "dim",
        "qr.label": "bold",
        "qr.source": "magenta",
        "qr.kind.text": "green",
        "qr.kind.binary": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "text": "qr.kind.text",
    "binary": "qr.kind.binary",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=QR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a decode output kind."""
    return _KIND_STYLES.get(kind, "")
