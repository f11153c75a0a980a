# src/api/facade.py — v2
"""Public API facade — single entry point for recipe extraction.

Usage:
    from recipextract.api.facade import extract_recipe
    response = await extract_recipe(ExtractRequest(url="https://..."))
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from recipextract.api.models import ExtractRequest, ExtractResponse
from recipextract.cache.cache_factory import create_cache_store
from recipextract.cache.recipe_cache import RecipeCache
from recipextract.cleanup.orchestrator import CleanupOrchestrator
from recipextract.config.cleanup import CleanupConfig
from recipextract.config.settings import Settings
from recipextract.fetch.http_fetcher import HttpFetcher
from recipextract.llm.client_factory import create_llm_client
from recipextract.llm.request_builder import RequestBuilder
from recipextract.pipeline.adaptive import AdaptiveExtractor
from recipextract.pipeline.extraction_pipeline import RecipeExtractionPipeline
from recipextract.pipeline.retry_loop import ExtractionRetryLoop
from recipextract.pipeline.single_flight import SingleFlight
from recipextract.storage.local_provider import LocalStorageProvider
from recipextract.validation.post_processor import RecipePostProcessor
from recipextract.validation.validator import RecipeValidator

if TYPE_CHECKING:
    from collections.abc import Callable

    from recipextract.cache.base_cache_store import BaseCacheStore
    from recipextract.fetch.base_fetcher import BaseFetcher
    from recipextract.llm.base_client import BaseExtractionClient
    from recipextract.storage.base_storage_provider import BaseStorageProvider

logger = logging.getLogger(__name__)


def build_pipeline(
    settings: Settings | None = None,
    *,
    cache_store: BaseCacheStore | None = None,
    llm_client: BaseExtractionClient | None = None,
    fetcher: BaseFetcher | None = None,
    storage: BaseStorageProvider | None = None,
    single_flight: SingleFlight | None = None,
    clock: Callable[[], date] = date.today,
) -> RecipeExtractionPipeline:
    """Wire a pipeline from settings, using factories for anything not injected.

    Args:
        settings: Global settings. Loaded from .env if None.
        cache_store: Cache backend. None = create from CACHE_BACKEND.
        llm_client: Extraction client. None = create from LLM_PROVIDER.
        fetcher: HTML fetcher. None = HttpFetcher.
        storage: Storage provider. None = local provider under STORAGE_ROOT.
        single_flight: Lock registry to share across pipelines. None = a new
            one when SINGLE_FLIGHT_ENABLED.
        clock: Today's date for prompts and post-processing.
    """
    settings = settings or Settings()

    orchestrator = CleanupOrchestrator(CleanupConfig.from_settings(settings))
    validator = RecipeValidator()
    loop = ExtractionRetryLoop(
        orchestrator=orchestrator,
        request_builder=RequestBuilder.from_settings(settings, clock=clock),
        client=llm_client or create_llm_client(settings),
        validator=validator,
        max_attempts=settings.llm_max_attempts,
        validation_enabled=settings.validation_enabled,
        request_timeout_s=settings.llm_timeout_s,
    )
    extractor = AdaptiveExtractor(
        loop,
        enabled=settings.adaptive_cleaning_enabled,
        confidence_threshold=settings.adaptive_confidence_threshold,
    )
    cache = RecipeCache(
        cache_store or create_cache_store(settings),
        enabled=settings.cache_enabled,
    )
    if single_flight is None and settings.single_flight_enabled:
        single_flight = SingleFlight()

    return RecipeExtractionPipeline(
        cache=cache,
        extractor=extractor,
        validator=validator,
        post_processor=RecipePostProcessor(settings.recipe_schema_version, clock=clock),
        fetcher=fetcher or HttpFetcher(settings.fetch_timeout_s, settings.fetch_user_agent),
        storage=storage or LocalStorageProvider(settings.storage_root),
        single_flight=single_flight,
    )


async def extract_recipe(
    request: ExtractRequest,
    settings: Settings | None = None,
    *,
    cache_store: BaseCacheStore | None = None,
    llm_client: BaseExtractionClient | None = None,
    fetcher: BaseFetcher | None = None,
    storage: BaseStorageProvider | None = None,
) -> ExtractResponse:
    """Extract recipes for one request end-to-end.

    Builds a pipeline from ``settings`` (injected collaborators win),
    runs it, and returns the response.

    Raises:
        ExtractionError: Terminal failure (transport, blocked, parse,
            retry exhausted).
        StorageError: If the requested upload failed.
    """
    settings = settings or Settings()
    owns_client = llm_client is None
    owns_fetcher = fetcher is None
    owns_store = cache_store is None
    llm_client = llm_client or create_llm_client(settings)
    fetcher = fetcher or HttpFetcher(settings.fetch_timeout_s, settings.fetch_user_agent)
    cache_store = cache_store or create_cache_store(settings)

    pipeline = build_pipeline(
        settings,
        cache_store=cache_store,
        llm_client=llm_client,
        fetcher=fetcher,
        storage=storage,
    )
    try:
        result = await pipeline.extract(
            url=request.url,
            html=request.html,
            text=request.text,
            compression=request.compression,
            skip_cache=request.skip_cache,
            folder_id=request.folder_id,
            title=request.title,
        )
    finally:
        if owns_client:
            await llm_client.aclose()
        if owns_fetcher:
            await fetcher.aclose()
        if owns_store:
            cache_store.close()
    return ExtractResponse.model_validate(result.model_dump())
