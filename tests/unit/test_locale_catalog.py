"""Unit tests for the in-memory locale catalog and YAML catalog loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from loctext.errors import MissingLocaleError
from loctext.localization.catalog import LocaleCatalog
from loctext.text.nodes import Composite, PlainText, Variable


def test_register_parses_string_alternatives_in_order() -> None:
    """Registered strings should be parsed and appended to existing alternatives."""

    catalog = LocaleCatalog()
    catalog.register("en_us", "greet", "Hi $name")
    catalog.register("en_us", "greet", PlainText("Hello"))

    assert catalog.localizations("en_us", "greet") == [
        Composite((PlainText("Hi "), Variable("name"))),
        PlainText("Hello"),
    ]


def test_localizations_returns_empty_list_for_missing_entries() -> None:
    """Unknown locales or paths should yield no alternatives."""

    catalog = LocaleCatalog()
    catalog.add_locale("en_us")

    assert catalog.localizations("en_us", "missing") == []
    assert catalog.localizations("fr_fr", "missing") == []


def test_require_locale_raises_for_unknown_locale() -> None:
    """Requiring an unregistered locale should raise `MissingLocaleError`."""

    catalog = LocaleCatalog()
    catalog.add_locale("en_us")

    assert catalog.require_locale("en_us") == "en_us"
    assert catalog.has_locale("en_us")
    with pytest.raises(MissingLocaleError, match="Locale `fr_fr` is not registered."):
        catalog.require_locale("fr_fr")


def test_load_yaml_flattens_nested_mappings(tmp_path: Path) -> None:
    """Nested YAML mappings should become dotted paths."""

    path = tmp_path / "en_us.yml"
    path.write_text(
        """
menu:
  title: "Main menu"
  items:
    - "Start"
    - "Quit"
greet:
  morning: "Good morning, $name!"
""".strip(),
        encoding="utf-8",
    )
    catalog = LocaleCatalog()

    count = catalog.load_yaml("en_us", path)

    assert count == 3
    assert catalog.paths("en_us") == ["greet.morning", "menu.items", "menu.title"]
    assert catalog.localizations("en_us", "menu.items") == [PlainText("Start"), PlainText("Quit")]


def test_load_yaml_registers_locale_for_empty_file(tmp_path: Path) -> None:
    """An empty catalog file should still register its locale."""

    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    catalog = LocaleCatalog()

    assert catalog.load_yaml("empty", path) == 0
    assert catalog.locales() == ["empty"]


@pytest.mark.parametrize(
    "payload",
    ["count: 5", "items:\n  - 1\n  - two", "- just\n- a list"],
)
def test_load_yaml_rejects_unsupported_values(tmp_path: Path, payload: str) -> None:
    """Non-string values and non-mapping documents should be rejected."""

    path = tmp_path / "en_us.yml"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError, match="Catalog `"):
        LocaleCatalog().load_yaml("en_us", path)


def test_from_directory_loads_every_catalog_file(locales_dir: Path) -> None:
    """Each YAML file should register a locale named after its stem."""

    catalog = LocaleCatalog.from_directory(locales_dir)

    assert catalog.locales() == ["en_us", "pt_br"]
    assert "greet.morning" in catalog.paths("en_us")
    assert catalog.localizations("pt_br", "kill") == [PlainText("mate")]


def test_from_directory_raises_for_missing_directory(tmp_path: Path) -> None:
    """A missing catalog directory should raise `FileNotFoundError`."""

    with pytest.raises(FileNotFoundError, match="Catalog directory not found"):
        LocaleCatalog.from_directory(tmp_path / "missing")
