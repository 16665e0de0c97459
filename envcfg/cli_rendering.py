"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and resolved settings listings.
"""

from __future__ import annotations

import json
import shlex
from typing import Mapping, NoReturn

import typer

from .errors import EnvcfgError, SettingsResolutionError


_REDACTED = "***"


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, SettingsResolutionError):
        typer.secho(
            f"{command_name} failed at line {exc.line_number}: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    if isinstance(exc, EnvcfgError) and exc.hint:
        typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=1) from exc


def echo_settings(settings: Mapping[str, str], output_format: str, redact: bool) -> None:
    """Print resolved settings sorted by key in `env` or `json` format."""

    rows = {
        key: (_REDACTED if redact else settings[key])
        for key in sorted(settings)
    }
    if output_format == "json":
        typer.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return
    for key, value in rows.items():
        typer.echo(f"{key}={shlex.quote(value)}")
