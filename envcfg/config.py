"""Resolver configuration model and loaders.

Responsibilities:
- Define resolver configuration as a typed, immutable dataclass.
- Provide deterministic precedence resolution for CLI and environment overrides.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `ResolverConfig`: prefixes and sentinels owned by one resolver instance.
- `RuntimeConfigSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `ResolverConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .env_reference import DEFAULT_ENV_PREFIX
from .parsing import clean_option, contains_whitespace, require_boolean_option


_DEFAULT_TRUE_VALUE = "1"
_DEFAULT_COMMENT_PREFIX = "#"

_FIELD_ENV_KEYS = {
    "env_prefix": "ENVCFG_ENV_PREFIX",
    "true_value": "ENVCFG_TRUE_VALUE",
    "comment_prefix": "ENVCFG_COMMENT_PREFIX",
    "empty_as_unset": "ENVCFG_EMPTY_AS_UNSET",
}


@dataclass(frozen=True, slots=True)
class RuntimeConfigSources:
    """Source mappings used for deterministic override precedence.

    Attributes:
        cli: Values explicitly provided by CLI options, keyed by field name.
        env: Values loaded from environment variables, keyed by variable name.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Configuration for one settings resolver.

    Attributes:
        env_prefix: Prefix marking a value as an environment reference.
        true_value: Value recorded for key-only flag directives.
        comment_prefix: Prefix marking a trimmed line as a comment.
        empty_as_unset: Treat variables set to the empty string as unset.
    """

    env_prefix: str = DEFAULT_ENV_PREFIX
    true_value: str = _DEFAULT_TRUE_VALUE
    comment_prefix: str = _DEFAULT_COMMENT_PREFIX
    empty_as_unset: bool = False

    def validate(self) -> None:
        """Validate configuration values before building a resolver."""

        self._require_token(self.env_prefix, "env_prefix")
        self._require_token(self.comment_prefix, "comment_prefix")
        if not isinstance(self.true_value, str) or not self.true_value:
            raise ValueError("`true_value` must be a non-empty string.")

    def resolved(self, sources: RuntimeConfigSources | None = None) -> ResolverConfig:
        """Return a validated copy with overrides applied.

        Precedence for each field is:
        `cli` > `env` > this config's value.
        """

        resolved_sources = sources if sources is not None else RuntimeConfigSources()
        overrides: dict[str, Any] = {}
        for field_name in ("env_prefix", "true_value", "comment_prefix"):
            override = self._lookup_override(field_name, resolved_sources)
            if override is not None:
                overrides[field_name] = override[0]

        override = self._lookup_override("empty_as_unset", resolved_sources)
        if override is not None:
            value, source = override
            overrides["empty_as_unset"] = require_boolean_option(value, "empty_as_unset", source)

        config = replace(self, **overrides)
        config.validate()
        return config

    @staticmethod
    def _lookup_override(
        field_name: str, sources: RuntimeConfigSources
    ) -> tuple[str, str] | None:
        """Return the highest-precedence override for a field with its source label."""

        cli_value = clean_option(sources.cli.get(field_name))
        if cli_value is not None:
            return cli_value, "the command line"
        env_key = _FIELD_ENV_KEYS[field_name]
        env_value = clean_option(sources.env.get(env_key))
        if env_value is not None:
            return env_value, f"`{env_key}`"
        return None

    @staticmethod
    def _require_token(value: str, field_name: str) -> None:
        """Validate that a prefix is a non-empty string without whitespace."""

        if not isinstance(value, str) or not value:
            raise ValueError(f"`{field_name}` must be a non-empty string.")
        if contains_whitespace(value):
            raise ValueError(f"`{field_name}` must not contain whitespace.")


class ConfigLoader:
    """Factory methods for creating `ResolverConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(_FIELD_ENV_KEYS)

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ResolverConfig:
        """Create a validated config from `ENVCFG_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return ResolverConfig().resolved(RuntimeConfigSources(env=env_map))

    @staticmethod
    def from_yaml(path: Path) -> ResolverConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ResolverConfig:
        """Build a validated config from a parsed mapping payload."""

        unknown = sorted(
            str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        config = ResolverConfig(
            env_prefix=ConfigLoader._optional_string(payload, "env_prefix")
            or DEFAULT_ENV_PREFIX,
            true_value=ConfigLoader._optional_string(payload, "true_value")
            or _DEFAULT_TRUE_VALUE,
            comment_prefix=ConfigLoader._optional_string(payload, "comment_prefix")
            or _DEFAULT_COMMENT_PREFIX,
            empty_as_unset=ConfigLoader._optional_boolean(
                payload, "empty_as_unset", source_label, default=False
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _optional_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return clean_option(payload[key])

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        return require_boolean_option(payload[key], key, source_label)
