"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Centralizes result emission: payload bytes go to
stdout (or ``--output``), status and errors to stderr, failures exit 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from qrctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pathlib import Path

    from qrctl.config.settings import QrSettings
    from qrctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: QrSettings) -> None:
        self.settings = settings

        from qrctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from qrctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            self._emit_warnings(result)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_payload(self, result: ServiceResult, key: str, output: Path | None) -> None:
        """Write the raw payload stored at ``result.data[key]``.

        JSON mode and failures go through :meth:`emit`.  Otherwise the
        payload is written to *output* (with the summary on stdout) or,
        when *output* is None, to stdout on its own.  ``str`` payloads are
        UTF-8 encoded; a trailing newline is added only on stdout.
        """
        if self.settings.json_output or not result.ok:
            self.emit(result)
            return

        payload = result.data[key]
        is_text = isinstance(payload, str)
        raw: bytes = payload.encode("utf-8") if is_text else payload

        if output is not None:
            output.write_bytes(raw)
            if not self.settings.quiet:
                click.echo(format_result(result, settings=self.output_settings))
        else:
            click.echo(raw, nl=is_text)
            if self.settings.verbose:
                click.echo(format_result(result, settings=self.output_settings), err=True)
        self._emit_warnings(result)

    def _emit_warnings(self, result: ServiceResult) -> None:
        # In JSON mode, warnings are already in the serialized payload.
        if self.settings.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
