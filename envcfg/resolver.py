"""Settings resolver for ecfg line streams.

Responsibilities:
- Resolve flag, literal, and environment-backed directives into a mapping.
- Stop at the first fatal directive and report it as a `ResolveFailure`.

Key types:
- `SettingsResolver`: single-pass resolver bound to one `ResolverConfig`.
- `Settings`: read-only resolved key/value mapping.
- `ResolveFailure`: first fatal diagnostic of a failed pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from typing import Iterable, Iterator, Mapping, Union

from .config import ResolverConfig
from .directives import Assignment, Flag, LineTokenizer, directive_kind
from .env_reference import EnvLookup, extract_env_if_prefix
from .errors import (
    IllegalDefaultTripleError,
    RequiredEnvUndefinedError,
    SettingsResolutionError,
)
from .telemetry.logger import ResolveLogger


class Settings(Mapping[str, str]):
    """Read-only mapping of resolved setting names to string values."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({sorted(self._values)!r})"

    def as_dict(self) -> dict[str, str]:
        """Return a mutable copy of the resolved values."""

        return dict(self._values)


class FailureKind(Enum):
    """Fatal resolve conditions."""

    REQUIRED_ENV_UNDEFINED = "required_env_undefined"
    ILLEGAL_DEFAULT_TRIPLE = "illegal_default_triple"


@dataclass(frozen=True, slots=True)
class ResolveFailure:
    """First fatal directive of a resolve pass.

    Attributes:
        kind: Failure category.
        line_number: 1-based line of the offending directive.
        line: Trimmed text of the offending line.
        token: Raw `ENV:` token for undefined variables, the whole line for
            illegal defaults.
    """

    kind: FailureKind
    line_number: int
    line: str
    token: str

    @property
    def message(self) -> str:
        """Human-readable diagnostic."""

        if self.kind is FailureKind.REQUIRED_ENV_UNDEFINED:
            return f"Environment variable is undefined: {self.token} (line {self.line_number})"
        return f"Default provided for a literal string: {self.token} (line {self.line_number})"

    @property
    def hint(self) -> str:
        """Remediation hint for CLI output."""

        if self.kind is FailureKind.REQUIRED_ENV_UNDEFINED:
            return "Export the variable, or append a default after the `ENV:` reference."
        return "Defaults are only allowed after an `ENV:` reference; remove the extra field."

    def to_error(self) -> SettingsResolutionError:
        """Build the matching exception for callers that raise."""

        if self.kind is FailureKind.REQUIRED_ENV_UNDEFINED:
            return RequiredEnvUndefinedError(self)
        return IllegalDefaultTripleError(self)


ResolveResult = Union[Settings, ResolveFailure]


class SettingsResolver:
    """Resolve ecfg lines in one pass using instance-owned prefixes and sentinels."""

    def __init__(self, config: ResolverConfig | None = None) -> None:
        """Validate `config` and build the line tokenizer for it."""

        self._config = config if config is not None else ResolverConfig()
        self._config.validate()
        self._tokenizer = LineTokenizer(comment_prefix=self._config.comment_prefix)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def resolve(
        self,
        lines: Iterable[str],
        environ: Mapping[str, str] | None = None,
        run_logger: ResolveLogger | None = None,
    ) -> ResolveResult:
        """Resolve `lines` into `Settings`, or return the first `ResolveFailure`.

        Args:
            lines: Raw text lines; any text stream opened for reading works.
            environ: Environment mapping to read; defaults to `os.environ`.
            run_logger: Optional event logger for this pass.
        """

        env_map: Mapping[str, str] = os.environ if environ is None else environ
        events = run_logger or ResolveLogger()
        events.log_resolve_start()

        values: dict[str, str] = {}
        for directive in self._tokenizer.iter_directives(lines):
            events.log_directive(directive.line_number, directive_kind(directive), directive.key)

            if isinstance(directive, Flag):
                values[directive.key] = self._config.true_value
                continue

            if isinstance(directive, Assignment):
                lookup = self._lookup(directive.value, env_map)
                if not lookup.prefix_present:
                    values[directive.key] = directive.value
                    continue
                if not lookup.is_set:
                    return self._fail(
                        events,
                        FailureKind.REQUIRED_ENV_UNDEFINED,
                        directive.line_number,
                        directive.line,
                        directive.value,
                    )
                values[directive.key] = lookup.value
                continue

            lookup = self._lookup(directive.env_ref, env_map)
            if not lookup.prefix_present:
                return self._fail(
                    events,
                    FailureKind.ILLEGAL_DEFAULT_TRIPLE,
                    directive.line_number,
                    directive.line,
                    directive.line,
                )
            values[directive.key] = lookup.value if lookup.is_set else directive.default

        events.log_resolve_complete(len(values))
        return Settings(values)

    def _lookup(self, token: str, env_map: Mapping[str, str]) -> EnvLookup:
        """Extract an env reference, folding empty values into unset when configured."""

        lookup = extract_env_if_prefix(token, self._config.env_prefix, env_map)
        if self._config.empty_as_unset and lookup.is_set and not lookup.value:
            return EnvLookup.unset(lookup.name or "")
        return lookup

    @staticmethod
    def _fail(
        events: ResolveLogger,
        kind: FailureKind,
        line_number: int,
        line: str,
        token: str,
    ) -> ResolveFailure:
        events.log_resolve_failure(kind.value, line_number)
        return ResolveFailure(kind=kind, line_number=line_number, line=line, token=token)


def resolve_settings(
    lines: Iterable[str],
    environ: Mapping[str, str] | None = None,
    config: ResolverConfig | None = None,
) -> ResolveResult:
    """Resolve `lines` with a resolver built from `config` (defaults when omitted)."""

    return SettingsResolver(config).resolve(lines, environ=environ)
