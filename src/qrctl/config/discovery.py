"""Locate and read ``qrctl.toml``.

Lookup order: the ``QRCTL_CONFIG`` env var, then a walk up from the
starting directory (the way git finds ``.git/``). ``-c/--config`` bypasses
discovery entirely in :meth:`~qrctl.config.settings.QrSettings.from_cli`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "qrctl.toml"
CONFIG_ENV_VAR = "QRCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A ``QRCTL_CONFIG`` pointing at a missing file disables discovery.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse *path* into raw section tables; ``{}`` when there is no file.

    Raises:
        click.ClickException: the file is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
