"""Shared pytest fixtures for the full loctext test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from loctext.localization.catalog import LocaleCatalog

_LOCALES_FIXTURE_DIR = Path(__file__).parent / "files" / "locales"


@pytest.fixture
def locales_dir() -> Path:
    """Provide the directory holding the `en_us`/`pt_br` YAML catalog fixtures."""

    return _LOCALES_FIXTURE_DIR


@pytest.fixture
def catalog(locales_dir: Path) -> LocaleCatalog:
    """Provide a catalog loaded from the YAML fixtures."""

    return LocaleCatalog.from_directory(locales_dir)
