"""Top-level package for envcfg.

envcfg reads `.ecfg` files, where each setting is a flag, a literal value, or
an `ENV:` reference into the process environment with an optional default.
The main entry points are `SettingsResolver` and `load_settings`.
"""

from loguru import logger

from .config import ConfigLoader, ResolverConfig, RuntimeConfigSources
from .env_reference import EnvLookup, EnvLookupState, extract_env_if_prefix
from .errors import (
    ConfigFileError,
    EnvcfgError,
    IllegalDefaultTripleError,
    RequiredEnvUndefinedError,
    SettingsResolutionError,
)
from .loader import load_settings, parse_settings, read_settings
from .resolver import (
    FailureKind,
    ResolveFailure,
    Settings,
    SettingsResolver,
    resolve_settings,
)

logger.disable("envcfg")

__all__ = [
    "ConfigFileError",
    "ConfigLoader",
    "EnvLookup",
    "EnvLookupState",
    "EnvcfgError",
    "FailureKind",
    "IllegalDefaultTripleError",
    "RequiredEnvUndefinedError",
    "ResolveFailure",
    "ResolverConfig",
    "RuntimeConfigSources",
    "Settings",
    "SettingsResolutionError",
    "SettingsResolver",
    "__version__",
    "extract_env_if_prefix",
    "load_settings",
    "parse_settings",
    "read_settings",
    "resolve_settings",
]

__version__ = "0.2.0"
