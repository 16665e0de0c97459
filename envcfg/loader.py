"""Stream, text, and file entry points that raise on resolve failure.

Responsibilities:
- Feed text streams, strings, and files to `SettingsResolver`.
- Convert `ResolveFailure` results and I/O problems into `EnvcfgError` exceptions.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Mapping, TextIO

from .config import ResolverConfig
from .errors import ConfigFileError
from .resolver import ResolveFailure, Settings, SettingsResolver
from .telemetry.logger import ResolveLogger


def read_settings(
    reader: TextIO,
    environ: Mapping[str, str] | None = None,
    config: ResolverConfig | None = None,
    source: str = "<stream>",
) -> Settings:
    """Resolve settings from an open text stream.

    The stream is consumed but not closed.

    Raises:
        RequiredEnvUndefinedError: A required `ENV:` variable is unset.
        IllegalDefaultTripleError: A default follows a literal value.
    """

    result = SettingsResolver(config).resolve(
        reader,
        environ=environ,
        run_logger=ResolveLogger(source),
    )
    if isinstance(result, ResolveFailure):
        raise result.to_error()
    return result


def parse_settings(
    text: str,
    environ: Mapping[str, str] | None = None,
    config: ResolverConfig | None = None,
) -> Settings:
    """Resolve settings from in-memory ecfg text.

    Lines break at newline characters only, as when the text is read from a stream.
    """

    return read_settings(io.StringIO(text), environ=environ, config=config, source="<text>")


def load_settings(
    path: Path,
    environ: Mapping[str, str] | None = None,
    config: ResolverConfig | None = None,
) -> Settings:
    """Resolve settings from an ecfg file on disk.

    Raises:
        ConfigFileError: The file is missing, unreadable, or not UTF-8 text.
        SettingsResolutionError: A directive failed to resolve.
    """

    try:
        with path.open("r", encoding="utf-8") as handle:
            return read_settings(handle, environ=environ, config=config, source=str(path))
    except FileNotFoundError as exc:
        raise ConfigFileError(
            f"Settings file not found: `{path}`.",
            hint="Pass the path to an existing `.ecfg` file.",
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigFileError(
            f"Settings file `{path}` is not valid UTF-8 text.",
            hint="Save the file with UTF-8 encoding.",
        ) from exc
    except IsADirectoryError as exc:
        raise ConfigFileError(
            f"Settings path `{path}` is a directory.",
            hint="Pass the path to an `.ecfg` file, not its folder.",
        ) from exc
    except OSError as exc:
        raise ConfigFileError(
            f"Settings file `{path}` cannot be read: {exc.strerror or exc}.",
            hint="Check the path length and the file permissions.",
        ) from exc
