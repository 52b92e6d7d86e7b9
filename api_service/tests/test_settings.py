"""Tests for API service settings loading."""

from __future__ import annotations

import importlib

from accessicinema.content_store import HttpContentStore, InMemoryContentStore


def test_load_settings_rejects_non_positive_values(monkeypatch) -> None:
    """Numeric environment variables should fall back when non-positive or invalid."""

    monkeypatch.setenv("CATALOG_TIMEOUT_S", "-1")
    monkeypatch.setenv("BRAILLE_CELLS_PER_LINE", "0")
    monkeypatch.setenv("TELEMETRY_MAX_EVENTS", "lots")
    monkeypatch.delenv("AI_PROVIDER", raising=False)

    import api_service.main as main

    importlib.reload(main)
    settings = main._load_settings()

    assert settings.catalog_timeout_s == 2.0
    assert settings.braille_cells_per_line == 40
    assert settings.telemetry_max_events == 50
    assert settings.ai_provider == "openai"


def test_catalog_url_selects_http_store(monkeypatch) -> None:
    monkeypatch.setenv("CATALOG_API_URL", "http://catalog.internal/api")
    monkeypatch.setenv("CATALOG_API_KEY", "catalog-key")
    monkeypatch.setenv("CATALOG_TIMEOUT_S", "3.5")

    import api_service.main as main

    importlib.reload(main)

    assert main.SETTINGS.catalog_timeout_s == 3.5
    assert isinstance(main._STORE, HttpContentStore)


def test_in_memory_store_without_catalog_url(monkeypatch) -> None:
    monkeypatch.delenv("CATALOG_API_URL", raising=False)

    import api_service.main as main

    importlib.reload(main)

    assert isinstance(main._STORE, InMemoryContentStore)
