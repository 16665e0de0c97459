"""Shared pytest fixtures for the full envcfg test suite."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
import pytest

_FILES_DIR = Path(__file__).parent / "files"
_RESOLVER_ENV_KEYS = (
    "ENVCFG_ENV_PREFIX",
    "ENVCFG_TRUE_VALUE",
    "ENVCFG_COMMENT_PREFIX",
    "ENVCFG_EMPTY_AS_UNSET",
)


@pytest.fixture(autouse=True)
def _isolate_resolver_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host `ENVCFG_*` overrides from leaking into tests."""

    for key in _RESOLVER_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_envcfg_logging():
    """Restore the package's silent logging state after each test."""

    yield
    logger.remove()
    logger.disable("envcfg")


@pytest.fixture
def sample_ecfg_path() -> Path:
    """Path to the canonical sample settings file."""

    return _FILES_DIR / "sample.ecfg"


@pytest.fixture
def sample_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set the environment expected by `sample.ecfg`."""

    monkeypatch.setenv("ENVCFG_TEST_ENV_KEY_VALUE", "ek_value")
    monkeypatch.setenv("ENVCFG_TEST_ENV_DEFINED", "ekd_value")
    monkeypatch.delenv("ENVCFG_TEST_ENV_UNDEFINED", raising=False)


@pytest.fixture
def sample_expected() -> dict[str, str]:
    """Settings resolved from `sample.ecfg` under `sample_env`."""

    return {
        "KEY_FLAG": "1",
        "VLKEY": "VLVALUE",
        "EKKEY": "ek_value",
        "EKDKEY": "ekd_value",
        "EKUKEY": "eku_default",
    }
