"""Configuration model and loaders for loctext.

Responsibilities:
- Define rendering configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `LoctextConfig`: normalized settings for catalog lookup and rendering.
- `ConfigLoader`: static construction helpers for `LoctextConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .localization.localizer import FORMATTERS
from .parsing import normalize_optional_string, parse_choice

_DEFAULT_LOCALE = "en_us"
_DEFAULT_FORMATTING = "strip"
_DEFAULT_LOG_LEVEL = "INFO"
FORMATTING_CHOICES = frozenset(FORMATTERS)
LOG_LEVEL_CHOICES = frozenset(
    {"trace", "debug", "info", "success", "warning", "error", "critical"}
)


@dataclass(slots=True)
class LoctextConfig:
    """Settings for one rendering session.

    Attributes:
        catalog_dir: Directory holding `<locale>.yml` catalog files.
        default_locale: Fallback locale used when a path is missing elsewhere.
        locale: Current locale; `None` means the default locale.
        formatting: Color/style rendering policy (`strip`, `codes`, or `ansi`).
        log_level: Minimum level for structured command logs.
    """

    catalog_dir: Path | None = None
    default_locale: str = _DEFAULT_LOCALE
    locale: str | None = None
    formatting: str = _DEFAULT_FORMATTING
    log_level: str = _DEFAULT_LOG_LEVEL

    @property
    def effective_locale(self) -> str:
        """Return the locale used when none is requested explicitly."""

        return self.locale or self.default_locale

    def validate(self) -> None:
        """Validate configuration values before use."""

        if normalize_optional_string(self.default_locale) is None:
            raise ValueError("`default_locale` must be a non-empty locale name.")
        if self.locale is not None and normalize_optional_string(self.locale) is None:
            raise ValueError("`locale` must be a non-empty locale name when provided.")
        parse_choice(self.formatting, FORMATTING_CHOICES, "formatting")
        parse_choice(self.log_level, LOG_LEVEL_CHOICES, "log_level")


class ConfigLoader:
    """Factory methods for creating `LoctextConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "catalog_dir",
            "default_locale",
            "locale",
            "formatting",
            "log_level",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> LoctextConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> LoctextConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        catalog_dir = normalize_optional_string(env_map.get("LOCTEXT_CATALOG_DIR"))
        formatting = normalize_optional_string(env_map.get("LOCTEXT_FORMATTING"))
        log_level = normalize_optional_string(env_map.get("LOCTEXT_LOG_LEVEL"))

        config = LoctextConfig(
            catalog_dir=Path(catalog_dir) if catalog_dir is not None else None,
            default_locale=(
                normalize_optional_string(env_map.get("LOCTEXT_DEFAULT_LOCALE"))
                or _DEFAULT_LOCALE
            ),
            locale=normalize_optional_string(env_map.get("LOCTEXT_LOCALE")),
            formatting=ConfigLoader._env_choice(
                formatting, FORMATTING_CHOICES, "LOCTEXT_FORMATTING", _DEFAULT_FORMATTING
            ),
            log_level=ConfigLoader._env_choice(
                log_level, LOG_LEVEL_CHOICES, "LOCTEXT_LOG_LEVEL", _DEFAULT_LOG_LEVEL
            ).upper(),
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> LoctextConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        catalog_dir = normalize_optional_string(payload.get("catalog_dir"))
        formatting = normalize_optional_string(payload.get("formatting"))
        log_level = normalize_optional_string(payload.get("log_level"))

        try:
            config = LoctextConfig(
                catalog_dir=Path(catalog_dir) if catalog_dir is not None else None,
                default_locale=(
                    normalize_optional_string(payload.get("default_locale")) or _DEFAULT_LOCALE
                ),
                locale=normalize_optional_string(payload.get("locale")),
                formatting=(
                    parse_choice(formatting, FORMATTING_CHOICES, "formatting")
                    if formatting is not None
                    else _DEFAULT_FORMATTING
                ),
                log_level=(
                    parse_choice(log_level, LOG_LEVEL_CHOICES, "log_level").upper()
                    if log_level is not None
                    else _DEFAULT_LOG_LEVEL
                ),
            )
        except ValueError as exc:
            if str(exc).startswith(source_label):
                raise
            raise ValueError(f"{source_label} {exc}") from exc
        config.validate()
        return config

    @staticmethod
    def _env_choice(
        value: str | None, choices: frozenset[str], key: str, default: str
    ) -> str:
        """Validate an optional environment choice value."""

        if value is None:
            return default
        try:
            return parse_choice(value, choices, key)
        except ValueError as exc:
            raise ValueError(f"Environment variable {exc}") from exc
