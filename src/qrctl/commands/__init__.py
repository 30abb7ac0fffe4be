"""Subcommand modules for qrctl.

This is the command table: register_commands() attaches every command to
the root group. Deferred imports keep ``qrctl --help`` from loading the
imaging and QR libraries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the decode and encode commands on the root CLI group."""
    from qrctl.commands.decode import decode
    from qrctl.commands.encode import encode

    cli.add_command(decode)
    cli.add_command(encode)
