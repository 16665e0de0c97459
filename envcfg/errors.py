"""Domain exceptions for settings resolution and CLI diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .resolver import ResolveFailure


class EnvcfgError(RuntimeError):
    """Base error carrying a concise detail and an optional remediation hint."""

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        """Initialize an error with user-facing detail and hint text."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class ConfigFileError(EnvcfgError):
    """Raised when an ecfg file or resolver config file cannot be used."""


class SettingsResolutionError(EnvcfgError):
    """Raised when an ecfg stream fails to resolve."""

    def __init__(self, failure: ResolveFailure) -> None:
        """Initialize from the failure record returned by the resolver."""

        super().__init__(failure.message, hint=failure.hint)
        self.failure = failure

    @property
    def line_number(self) -> int:
        """1-based line number of the offending directive."""

        return self.failure.line_number


class RequiredEnvUndefinedError(SettingsResolutionError):
    """A required `ENV:` reference named an unset environment variable."""


class IllegalDefaultTripleError(SettingsResolutionError):
    """A default value followed a literal instead of an `ENV:` reference."""
