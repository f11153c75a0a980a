# tests/integration/conftest.py — v8
"""Shared fixtures for integration tests.

Every collaborator is real except the two network edges: the extraction
client (AsyncMock returning decoded verdicts) and the HTML fetcher.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from recipextract.api.facade import build_pipeline
from recipextract.cache.json_store import JsonCacheStore
from recipextract.config.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        cache_root=tmp_path / "cache",
        storage_root=tmp_path / "recipes",
        llm_max_attempts=3,
    )


@pytest.fixture
def cache_store(settings) -> JsonCacheStore:
    return JsonCacheStore(settings.cache_root)


@pytest.fixture
def fetcher(article_page_html) -> AsyncMock:
    mock = AsyncMock()
    mock.fetch = AsyncMock(return_value=article_page_html)
    return mock


@pytest.fixture
def make_pipeline(settings, cache_store, fetcher, fixed_today):
    """Build a fully wired pipeline around a scripted extraction client."""

    def factory(client, **overrides):
        pipeline_settings = overrides.pop("settings", settings)
        kwargs = dict(
            cache_store=cache_store,
            llm_client=client,
            fetcher=fetcher,
            clock=lambda: fixed_today,
        )
        kwargs.update(overrides)
        return build_pipeline(pipeline_settings, **kwargs)

    return factory


@pytest.fixture
def scripted_client():
    """Extraction client that returns (or raises) the given items in order."""

    def factory(*results) -> AsyncMock:
        client = AsyncMock()
        client.send = AsyncMock(side_effect=list(results))
        client.provider_name = "scripted"
        return client

    return factory
