"""Output mode selection.

The CLI renders ServiceResult for humans (Rich) or machines (--json).
The formatter layer adapts ServiceResult to the requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from qrctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from qrctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Global output flags relevant to formatting."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode serializes the whole result (bytes as base64); quiet mode
    prints a single status line; otherwise a Rich rendering is returned.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
