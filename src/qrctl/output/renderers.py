"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from qrctl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from qrctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        return f"ERROR: {result.op} — {_error_text(result)}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _error_text(result: ServiceResult) -> str:
    err = result.error
    if err is None:
        return "Unknown error"
    return f"{err.label}: {err.message}"


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="qr.ok")
    op = Text(f"  {result.op}", style="qr.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="qr.key")
    v = Text(str(value), style=style)
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration >= 1000:
        style = "red"
    elif duration >= 100:
        style = "yellow"
    else:
        style = "green"

    line = Text(prefix)
    line.append(name)
    line.append(f"  {duration:.2f}ms", style=style)
    for key, value in span_data.get("annotations", {}).items():
        line.append(f"  {key}={value}", style="dim")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 2)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    label = Text("ERROR", style="qr.error")
    op = Text(f"  {result.op}", style="qr.op")
    sep = Text(" — ")
    if err is None:
        console.print(label, op, sep, "Unknown error")
        return

    console.print(label, op, sep, Text(err.label, style="qr.label"))
    console.print(f"  {err.message}")
    if err.source:
        _field(console, "source", err.source, style="qr.source")

    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_decode(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render decode summary (the payload itself is written separately)."""
    _status_line(console, result)
    d = result.data
    kind = str(d.get("kind", ""))
    _field(console, "kind", kind, style=style_for_kind(kind))
    _field(console, "symbols", d.get("symbols", 0))
    if d.get("skipped"):
        _field(console, "skipped", d["skipped"], style="qr.warning")
    payload = d.get("payload")
    if payload is not None:
        _field(console, "size", f"{len(payload)} {'chars' if kind == 'text' else 'bytes'}")
    if verbose:
        _render_meta(console, result)


def _render_encode(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render encode summary (the PNG itself is written separately)."""
    _status_line(console, result)
    d = result.data
    _field(console, "shape", d.get("shape", ""))
    _field(console, "dimensions", f"{d.get('width', 0)}x{d.get('height', 0)}")
    _field(console, "version", d.get("version", ""))
    png = d.get("png")
    if png is not None:
        _field(console, "size", f"{len(png)} bytes")
    if verbose:
        _field(console, "size_spec", d.get("size_spec", {}))
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line plus key-value data."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, bytes):
            value = f"<{len(value)} bytes>"
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "decode": _render_decode,
    "encode": _render_encode,
}
