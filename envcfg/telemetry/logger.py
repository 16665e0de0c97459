"""Structured resolve logging utilities.

Responsibilities:
- Emit concise, deterministic event lines for settings resolution.
- Never include setting or environment values in log output.
"""

from __future__ import annotations

import re
import sys
from typing import TextIO

from loguru import logger as _loguru_logger


_PACKAGE_NAME = "envcfg"
_UNSAFE_FIELD_CHARS = re.compile(r"[^A-Za-z0-9_.:/-]")


def _render_fields(fields: dict[str, object]) -> str:
    """Render `key=value` pairs sorted by key, with shell-unsafe characters replaced."""

    return "".join(
        f" {name}={_UNSAFE_FIELD_CHARS.sub('_', str(fields[name]).strip()) or 'none'}"
        for name in sorted(fields)
    )


def configure_logging(sink: TextIO | None = None, verbose: bool = False) -> None:
    """Route envcfg log events to `sink` (stderr by default).

    The package disables its loguru output on import; applications opt in here.
    """

    _loguru_logger.remove()
    _loguru_logger.add(
        sink or sys.stderr,
        format="{message}",
        level="DEBUG" if verbose else "INFO",
        colorize=False,
    )
    _loguru_logger.enable(_PACKAGE_NAME)


class ResolveLogger:
    """Emit deterministic events for one resolve pass over a named source."""

    def __init__(self, source: str = "<stream>") -> None:
        self._source = source

    def _emit(self, level: str, event: str, **fields: object) -> None:
        """Emit one structured log line."""

        line = f"[envcfg] level={level} event={event}{_render_fields(fields)}"
        _loguru_logger.log(level, line)

    def log_resolve_start(self) -> None:
        self._emit("INFO", "resolve_start", source=self._source)

    def log_directive(self, line_number: int, kind: str, key: str) -> None:
        """Emit a debug event for one parsed directive (key only, never values)."""

        self._emit("DEBUG", "directive", line=line_number, kind=kind, key=key)

    def log_resolve_complete(self, setting_count: int) -> None:
        self._emit("INFO", "resolve_complete", source=self._source, settings=setting_count)

    def log_resolve_failure(self, kind: str, line_number: int) -> None:
        """Emit a failure event without the offending token, which may hold secrets."""

        self._emit("ERROR", "resolve_failure", source=self._source, kind=kind, line=line_number)
