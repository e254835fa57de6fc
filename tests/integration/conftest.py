"""Integration-test fixtures for deterministic CLI configuration."""

from __future__ import annotations

import pytest

_ENV_KEYS = (
    "LOCTEXT_CATALOG_DIR",
    "LOCTEXT_DEFAULT_LOCALE",
    "LOCTEXT_LOCALE",
    "LOCTEXT_FORMATTING",
    "LOCTEXT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clear_loctext_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove `LOCTEXT_*` variables so CLI tests do not depend on the host environment."""

    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
