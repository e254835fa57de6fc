"""In-memory locale catalog and YAML catalog loading.

Responsibilities:
- Store ordered localization alternatives per locale and dotted path.
- Load catalogs from YAML files, flattening nested mappings into dotted paths.

File layout: one `<locale>.yml` (or `.yaml`) file per locale. A string value is
one alternative; a list of strings is one alternative per element.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from ..errors import MissingLocaleError
from ..text.nodes import TextNode, single
from ..text.parser import parse

_CATALOG_SUFFIXES = (".yml", ".yaml")


class LocaleCatalog:
    """Localization alternatives keyed by locale name and dotted path."""

    def __init__(self) -> None:
        """Initialize an empty catalog."""

        self._entries: dict[str, dict[str, list[TextNode]]] = {}

    def register(self, locale: str, path: str, *alternatives: object) -> None:
        """Append alternatives for `path` in `locale`, registering the locale if needed.

        String alternatives are parsed from the annotated string form.
        """

        paths = self._entries.setdefault(locale, {})
        bucket = paths.setdefault(path, [])
        for alternative in alternatives:
            bucket.append(parse(alternative) if isinstance(alternative, str) else single(alternative))

    def add_locale(self, locale: str) -> None:
        """Register `locale` without any localization."""

        self._entries.setdefault(locale, {})

    def has_locale(self, locale: str) -> bool:
        """Return whether `locale` is registered."""

        return locale in self._entries

    def require_locale(self, locale: str) -> str:
        """Return `locale` when registered.

        Raises:
            MissingLocaleError: If the locale is unknown.
        """

        if locale not in self._entries:
            raise MissingLocaleError(locale)
        return locale

    def locales(self) -> list[str]:
        """Return registered locale names in sorted order."""

        return sorted(self._entries)

    def paths(self, locale: str) -> list[str]:
        """Return localization paths of `locale` in sorted order."""

        return sorted(self._entries.get(locale, {}))

    def localizations(self, locale: str, path: str) -> list[TextNode]:
        """Return alternatives for `path` in `locale`, or an empty list."""

        return list(self._entries.get(locale, {}).get(path, ()))

    def load_yaml(self, locale: str, path: Path) -> int:
        """Load one YAML catalog file into `locale` and return the number of paths read."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            self.add_locale(locale)
            return 0
        if not isinstance(payload, Mapping):
            raise ValueError(f"Catalog `{path}` must contain a top-level mapping/object.")

        count = 0
        for key, value in _flatten(payload, source=path):
            self.register(locale, key, *_alternatives(value, key, path))
            count += 1
        if count == 0:
            self.add_locale(locale)
        return count

    @classmethod
    def from_directory(cls, directory: Path) -> LocaleCatalog:
        """Load every YAML catalog file of `directory`; file stems name the locales."""

        if not directory.is_dir():
            raise FileNotFoundError(f"Catalog directory not found: `{directory}`.")

        catalog = cls()
        for path in sorted(directory.iterdir()):
            if path.is_file() and path.suffix.lower() in _CATALOG_SUFFIXES:
                catalog.load_yaml(path.stem.lower(), path)
        return catalog


def _flatten(payload: Mapping[Any, Any], source: Path) -> Iterable[tuple[str, Any]]:
    """Yield `(dotted_path, value)` pairs for every non-mapping leaf of `payload`."""

    pending: list[tuple[str, Mapping[Any, Any]]] = [("", payload)]
    while pending:
        prefix, mapping = pending.pop()
        nested: list[tuple[str, Mapping[Any, Any]]] = []
        for raw_key, value in mapping.items():
            key = str(raw_key).strip()
            if not key:
                raise ValueError(f"Catalog `{source}` contains a blank key.")
            dotted = f"{prefix}.{key}" if prefix else key
            if isinstance(value, Mapping):
                nested.append((dotted, value))
            else:
                yield dotted, value
        pending.extend(reversed(nested))


def _alternatives(value: Any, key: str, source: Path) -> list[str]:
    """Validate one catalog value and return its alternatives."""

    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ValueError(
        f"Catalog `{source}` value for `{key}` must be a string or a list of strings."
    )
