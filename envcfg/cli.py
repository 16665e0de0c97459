"""Command-line interface for envcfg.

Responsibilities:
- Expose user-facing commands for checking and printing resolved ecfg files.
- Convert CLI options into a `ResolverConfig` with YAML and environment defaults.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from enum import Enum
import os
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_settings, exit_with_command_error
from .config import ConfigLoader, ResolverConfig, RuntimeConfigSources
from .errors import ConfigFileError, EnvcfgError
from .loader import load_settings
from .resolver import Settings
from .telemetry.logger import configure_logging

app = typer.Typer(
    name="envcfg",
    no_args_is_help=True,
    help="Resolve `.ecfg` settings files against the process environment.",
)


class OutputFormat(str, Enum):
    """Supported `show` output formats."""

    ENV = "env"
    JSON = "json"


SettingsFileArgument = Annotated[
    Path,
    typer.Argument(help="Path to the `.ecfg` settings file."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML resolver config file."),
]
EnvPrefixOption = Annotated[
    str | None,
    typer.Option("--env-prefix", help="Prefix marking environment references (default `ENV:`)."),
]
TrueValueOption = Annotated[
    str | None,
    typer.Option("--true-value", help="Value recorded for key-only flags (default `1`)."),
]
CommentPrefixOption = Annotated[
    str | None,
    typer.Option("--comment-prefix", help="Prefix marking comment lines (default `#`)."),
]
EmptyAsUnsetOption = Annotated[
    bool | None,
    typer.Option(
        "--empty-as-unset/--no-empty-as-unset",
        help="Treat environment variables set to an empty string as unset.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Log resolve events to stderr."),
]


def _load_yaml_config(config_path: Path | None) -> ResolverConfig:
    """Load a YAML resolver config when requested and map failures to config errors."""

    if config_path is None:
        return ResolverConfig()

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise ConfigFileError(
            f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ConfigFileError(
            f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config keys/values and rerun.",
        ) from exc


def _resolve_command_config(
    config_file: Path | None,
    env_prefix: str | None,
    true_value: str | None,
    comment_prefix: str | None,
    empty_as_unset: bool | None,
) -> ResolverConfig:
    """Resolve effective resolver config: CLI options > `ENVCFG_*` env > YAML > defaults."""

    base_config = _load_yaml_config(config_file)

    cli_values: dict[str, str] = {}
    if env_prefix is not None:
        cli_values["env_prefix"] = env_prefix
    if true_value is not None:
        cli_values["true_value"] = true_value
    if comment_prefix is not None:
        cli_values["comment_prefix"] = comment_prefix
    if empty_as_unset is not None:
        cli_values["empty_as_unset"] = "true" if empty_as_unset else "false"

    try:
        return base_config.resolved(RuntimeConfigSources(cli=cli_values, env=os.environ))
    except ValueError as exc:
        raise ConfigFileError(
            f"Invalid resolver configuration: {exc}",
            hint="Check `--env-prefix`/`--comment-prefix` options and `ENVCFG_*` variables.",
        ) from exc


def _load_command_settings(
    settings_file: Path,
    config_file: Path | None,
    env_prefix: str | None,
    true_value: str | None,
    comment_prefix: str | None,
    empty_as_unset: bool | None,
    verbose: bool,
) -> Settings:
    """Configure logging, build the resolver config, and resolve one settings file."""

    if verbose:
        configure_logging(verbose=True)
    config = _resolve_command_config(
        config_file=config_file,
        env_prefix=env_prefix,
        true_value=true_value,
        comment_prefix=comment_prefix,
        empty_as_unset=empty_as_unset,
    )
    return load_settings(settings_file, config=config)


@app.command("check")
def check_command(
    settings_file: SettingsFileArgument,
    config_file: ConfigOption = None,
    env_prefix: EnvPrefixOption = None,
    true_value: TrueValueOption = None,
    comment_prefix: CommentPrefixOption = None,
    empty_as_unset: EmptyAsUnsetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Verify that a settings file resolves in the current environment."""

    try:
        settings = _load_command_settings(
            settings_file,
            config_file,
            env_prefix,
            true_value,
            comment_prefix,
            empty_as_unset,
            verbose,
        )
    except Exception as exc:
        exit_with_command_error("check", exc)

    typer.echo(f"OK: {len(settings)} settings resolved from {settings_file}")


@app.command("show")
def show_command(
    settings_file: SettingsFileArgument,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format: `env` or `json`."),
    ] = OutputFormat.ENV,
    redact: Annotated[
        bool,
        typer.Option("--redact", help="Replace values with `***`."),
    ] = False,
    config_file: ConfigOption = None,
    env_prefix: EnvPrefixOption = None,
    true_value: TrueValueOption = None,
    comment_prefix: CommentPrefixOption = None,
    empty_as_unset: EmptyAsUnsetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print all resolved settings sorted by key."""

    try:
        settings = _load_command_settings(
            settings_file,
            config_file,
            env_prefix,
            true_value,
            comment_prefix,
            empty_as_unset,
            verbose,
        )
    except Exception as exc:
        exit_with_command_error("show", exc)

    echo_settings(settings, output_format.value, redact)


@app.command("get")
def get_command(
    settings_file: SettingsFileArgument,
    key: Annotated[str, typer.Argument(help="Setting name to print.")],
    config_file: ConfigOption = None,
    env_prefix: EnvPrefixOption = None,
    true_value: TrueValueOption = None,
    comment_prefix: CommentPrefixOption = None,
    empty_as_unset: EmptyAsUnsetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the resolved value of one setting."""

    try:
        settings = _load_command_settings(
            settings_file,
            config_file,
            env_prefix,
            true_value,
            comment_prefix,
            empty_as_unset,
            verbose,
        )
        if key not in settings:
            raise EnvcfgError(
                f"Key `{key}` is not defined in `{settings_file}`.",
                hint="Run `envcfg show <file> --redact` to list resolved keys.",
            )
    except Exception as exc:
        exit_with_command_error("get", exc)

    typer.echo(settings[key])


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
