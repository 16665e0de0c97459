"""Unit tests for single-pass settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from envcfg.config import ResolverConfig
from envcfg.errors import IllegalDefaultTripleError, RequiredEnvUndefinedError
from envcfg.resolver import (
    FailureKind,
    ResolveFailure,
    Settings,
    SettingsResolver,
    resolve_settings,
)


def _resolve(text: str, environ: dict[str, str], **config: object) -> Settings | ResolveFailure:
    resolver = SettingsResolver(ResolverConfig(**config))
    return resolver.resolve(text.splitlines(), environ=environ)


def test_resolve_sample_file_matches_expected_mapping(
    sample_ecfg_path: Path, sample_env: None, sample_expected: dict[str, str]
) -> None:
    """The canonical sample should resolve flags, literals, and env references."""

    with sample_ecfg_path.open(encoding="utf-8") as handle:
        result = SettingsResolver().resolve(handle)

    assert isinstance(result, Settings)
    assert result == sample_expected


def test_resolve_flag_records_true_sentinel() -> None:
    assert _resolve("KEY_FLAG", {}) == {"KEY_FLAG": "1"}


def test_resolve_literal_is_recorded_verbatim() -> None:
    assert _resolve("URL  https://example.test/a?b=c", {}) == {
        "URL": "https://example.test/a?b=c"
    }


def test_resolve_required_env_uses_variable_value() -> None:
    result = _resolve("EKKEY ENV:EK", {"EK": "ek_value"})

    assert result == {"EKKEY": "ek_value"}


def test_resolve_required_env_accepts_empty_value() -> None:
    """A variable set to the empty string satisfies a required reference."""

    assert _resolve("EKKEY ENV:EK", {"EK": ""}) == {"EKKEY": ""}


def test_resolve_required_env_fails_when_unset() -> None:
    text = "A 1\nEKKEY ENV:MISSING\nB 2"

    result = _resolve(text, {})

    assert result == ResolveFailure(
        kind=FailureKind.REQUIRED_ENV_UNDEFINED,
        line_number=2,
        line="EKKEY ENV:MISSING",
        token="ENV:MISSING",
    )
    assert "Environment variable is undefined: ENV:MISSING" in result.message


def test_resolve_env_default_prefers_set_variable_including_empty() -> None:
    text = "SET ENV:SET fallback\nEMPTY ENV:EMPTY fallback\nUNSET ENV:UNSET fall back"

    result = _resolve(text, {"SET": "value", "EMPTY": ""})

    assert result == {"SET": "value", "EMPTY": "", "UNSET": "fall back"}


def test_resolve_default_after_literal_is_illegal() -> None:
    result = _resolve("KEY literal default", {})

    assert isinstance(result, ResolveFailure)
    assert result.kind is FailureKind.ILLEGAL_DEFAULT_TRIPLE
    assert result.token == "KEY literal default"
    assert result.line_number == 1
    assert isinstance(result.to_error(), IllegalDefaultTripleError)


def test_resolve_stops_at_first_failure_in_file_order() -> None:
    text = "BAD literal default\nMISSING ENV:MISSING"

    result = _resolve(text, {})

    assert isinstance(result, ResolveFailure)
    assert result.kind is FailureKind.ILLEGAL_DEFAULT_TRIPLE


def test_resolve_skips_blank_and_comment_lines() -> None:
    text = "\n   \n# KEY ENV:MISSING\n\t#  BAD literal default\n"

    assert _resolve(text, {}) == {}


def test_resolve_last_duplicate_key_wins() -> None:
    assert _resolve("KEY first\nKEY second\nKEY", {}) == {"KEY": "1"}


def test_resolve_is_idempotent_for_unchanged_environment() -> None:
    lines = ["A", "B ENV:B", "C ENV:C default"]
    environ = {"B": "b"}
    resolver = SettingsResolver()

    assert resolver.resolve(lines, environ=environ) == resolver.resolve(lines, environ=environ)


def test_resolve_does_not_mutate_environment() -> None:
    environ = {"B": "b"}

    _resolve("A ENV:B\nC ENV:C default", environ)

    assert environ == {"B": "b"}


def test_resolve_reads_os_environ_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVCFG_UNIT_RESOLVER", "from-os")

    assert resolve_settings(["KEY ENV:ENVCFG_UNIT_RESOLVER"]) == {"KEY": "from-os"}


def test_resolvers_with_different_config_are_independent() -> None:
    environ = {"TOKEN": "secret"}
    lines = ["FLAG", "TOKEN $TOKEN", "; comment"]

    custom = SettingsResolver(
        ResolverConfig(env_prefix="$", true_value="true", comment_prefix=";")
    )

    assert custom.resolve(lines, environ=environ) == {"FLAG": "true", "TOKEN": "secret"}
    assert SettingsResolver().resolve(lines, environ=environ) == {
        "FLAG": "1",
        "TOKEN": "$TOKEN",
        ";": "comment",
    }


def test_resolve_empty_as_unset_restores_collapsed_semantics() -> None:
    required = _resolve("KEY ENV:EMPTY", {"EMPTY": ""}, empty_as_unset=True)
    defaulted = _resolve("KEY ENV:EMPTY fallback", {"EMPTY": ""}, empty_as_unset=True)

    assert isinstance(required, ResolveFailure)
    assert required.kind is FailureKind.REQUIRED_ENV_UNDEFINED
    assert isinstance(required.to_error(), RequiredEnvUndefinedError)
    assert defaulted == {"KEY": "fallback"}


def test_settings_is_read_only_mapping() -> None:
    settings = Settings({"A": "1"})

    with pytest.raises(TypeError):
        settings["A"] = "2"  # type: ignore[index]

    copy = settings.as_dict()
    copy["A"] = "2"
    assert settings["A"] == "1"
    assert len(settings) == 1
    assert list(settings) == ["A"]
