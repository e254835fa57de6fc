"""Command-line interface for loctext.

Responsibilities:
- Expose user-facing commands for parsing, normalizing, and rendering text.
- Convert CLI arguments and YAML/environment settings into `LoctextConfig`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_locale_summary, echo_tree, exit_with_command_error
from .config import FORMATTING_CHOICES, ConfigLoader, LoctextConfig
from .errors import CommandStageError, MissingLocaleError
from .localization.catalog import LocaleCatalog
from .localization.localizer import TextLocalizer
from .parsing import normalize_optional_string, parse_assignment, parse_choice
from .telemetry.logger import CommandLogger
from .text.nodes import TextNode
from .text.parser import parse
from .text.serializer import serialize

app = typer.Typer(
    name="loctext",
    no_args_is_help=True,
    help="Parse, normalize, and render annotated localizable text.",
)


def _load_yaml_config(config_path: Path | None) -> LoctextConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _resolve_config(
    config_file: Path | None,
    catalog_dir: Path | None = None,
    locale: str | None = None,
    default_locale: str | None = None,
    formatting: str | None = None,
) -> LoctextConfig:
    """Resolve effective config from YAML (or environment) defaults and CLI overrides."""

    config = _load_yaml_config(config_file)
    if config is None:
        try:
            config = ConfigLoader.from_env()
        except ValueError as exc:
            raise CommandStageError(
                stage="config",
                detail=str(exc),
                hint="Fix or unset the `LOCTEXT_*` environment variables.",
            ) from exc

    if catalog_dir is not None:
        config.catalog_dir = catalog_dir
    locale = normalize_optional_string(locale)
    if locale is not None:
        config.locale = locale
    default_locale = normalize_optional_string(default_locale)
    if default_locale is not None:
        config.default_locale = default_locale
    if formatting is not None:
        try:
            config.formatting = parse_choice(formatting, FORMATTING_CHOICES, "--formatting")
        except ValueError as exc:
            raise CommandStageError(
                stage="config",
                detail=str(exc),
                hint="Use one of `strip`, `codes`, or `ansi`.",
            ) from exc
    return config


def _load_catalog(config: LoctextConfig) -> LocaleCatalog:
    """Load the configured catalog, or an empty one holding only the default locale."""

    if config.catalog_dir is None:
        catalog = LocaleCatalog()
        catalog.add_locale(config.default_locale)
        if config.locale is not None:
            catalog.add_locale(config.locale)
        return catalog

    try:
        return LocaleCatalog.from_directory(config.catalog_dir)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="catalog",
            detail=str(exc),
            hint="Pass an existing directory via `--catalog-dir <dir>`.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="catalog",
            detail=str(exc),
            hint="Catalog values must be strings or lists of strings.",
        ) from exc


def _parse_arguments(assignments: list[str]) -> dict[str, TextNode]:
    """Parse `NAME=TEMPLATE` assignments into variable bindings."""

    arguments: dict[str, TextNode] = {}
    for assignment in assignments:
        try:
            name, template = parse_assignment(assignment, "--arg")
        except ValueError as exc:
            raise CommandStageError(
                stage="arguments",
                detail=str(exc),
                hint="Pass variables as `--arg name=value`.",
            ) from exc
        arguments[name] = parse(template)
    return arguments


@app.command("parse")
def parse_command(
    raw: Annotated[str, typer.Argument(help="Annotated string to parse.")],
) -> None:
    """Print the parsed and normalized tree of an annotated string."""

    echo_tree(parse(raw))


@app.command("normalize")
def normalize_command(
    raw: Annotated[str, typer.Argument(help="Annotated string to normalize.")],
) -> None:
    """Print the canonical annotated form of a string."""

    try:
        canonical = serialize(parse(raw))
    except Exception as exc:
        exit_with_command_error("normalize", exc)
    typer.echo(canonical)


@app.command("render")
def render_command(
    raw: Annotated[str, typer.Argument(help="Annotated string to render.")],
    arg: Annotated[
        list[str] | None,
        typer.Option("--arg", help="Variable binding `NAME=TEMPLATE`; repeatable."),
    ] = None,
    locale: Annotated[
        str | None,
        typer.Option("--locale", help="Locale used to resolve `#path` placeholders."),
    ] = None,
    default_locale: Annotated[
        str | None,
        typer.Option("--default-locale", help="Fallback locale for missing paths."),
    ] = None,
    catalog_dir: Annotated[
        Path | None,
        typer.Option("--catalog-dir", help="Directory of `<locale>.yml` catalog files."),
    ] = None,
    formatting: Annotated[
        str | None,
        typer.Option("--formatting", help="Color/style policy: strip, codes, or ansi."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
) -> None:
    """Render an annotated string against a locale catalog."""

    try:
        config = _resolve_config(config_file, catalog_dir, locale, default_locale, formatting)
        run_logger = CommandLogger("render", level=config.log_level)
        run_logger.log_stage_complete("config", formatting=config.formatting)
        catalog = run_logger.run_stage("catalog", lambda: _load_catalog(config))
        node = run_logger.run_stage("parse", lambda: parse(raw))
        arguments = run_logger.run_stage("arguments", lambda: _parse_arguments(arg or []))
        try:
            localizer = TextLocalizer(
                catalog,
                config.default_locale,
                config.locale,
                formatting=config.formatting,
            )
        except MissingLocaleError as exc:
            raise CommandStageError(
                stage="catalog",
                detail=str(exc),
                hint="Add a `<locale>.yml` file to the catalog directory or pick another locale.",
            ) from exc
        rendered = run_logger.run_stage("render", lambda: localizer.localize(node, arguments))
    except Exception as exc:
        exit_with_command_error("render", exc)

    typer.echo(rendered)


@app.command("locales")
def locales_command(
    catalog_dir: Annotated[
        Path | None,
        typer.Option("--catalog-dir", help="Directory of `<locale>.yml` catalog files."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
) -> None:
    """List catalog locales with their localization path counts."""

    try:
        config = _resolve_config(config_file, catalog_dir)
        if config.catalog_dir is None:
            raise CommandStageError(
                stage="config",
                detail="A catalog directory is required.",
                hint="Pass `--catalog-dir <dir>` or set `catalog_dir` in the config file.",
            )
        catalog = _load_catalog(config)
    except Exception as exc:
        exit_with_command_error("locales", exc)

    echo_locale_summary(catalog)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
