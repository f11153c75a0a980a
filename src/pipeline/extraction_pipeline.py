# src/pipeline/extraction_pipeline.py — v1
"""Recipe extraction pipeline — top-level orchestrator for one request.

  fingerprint → cache lookup ─hit→ return stored result
                    └miss→ resolve HTML → adaptive loop → post-process
                           → cache put → optional storage upload

Only SUCCESS is cached (a recipe list, or "" with is_valid=False for a
clean negative). RetryExhausted and transport/blocked/parse failures
propagate and leave the cache untouched.
"""

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from recipextract.cache.fingerprint import compute_fingerprint
from recipextract.core.models import StrategyName
from recipextract.core.recipe import Recipe
from recipextract.fetch.source import Compression, resolve_source
from recipextract.logging.context import clear_context, set_extraction_context
from recipextract.storage.base_storage_provider import UploadResult
from recipextract.storage.naming import generate_file_name
from recipextract.validation.post_processor import UNTITLED_RECIPE

if TYPE_CHECKING:
    from recipextract.cache.models import CachedEntry
    from recipextract.cache.recipe_cache import RecipeCache
    from recipextract.fetch.base_fetcher import BaseFetcher
    from recipextract.pipeline.adaptive import AdaptiveExtractor
    from recipextract.pipeline.single_flight import SingleFlight
    from recipextract.storage.base_storage_provider import BaseStorageProvider
    from recipextract.validation.post_processor import RecipePostProcessor
    from recipextract.validation.validator import RecipeValidator

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    """Outcome of one pipeline call."""

    fingerprint: str
    is_recipe: bool
    from_cache: bool = False
    strategy: StrategyName | None = None
    attempts: int = 0
    serialized: str = ""
    recipes: list[Recipe] = Field(default_factory=list)
    stored_files: list[UploadResult] = Field(default_factory=list)
    version: int | None = None
    over_cleaned_suspected: bool = False


class RecipeExtractionPipeline:
    """Cache-gated extraction for a single page.

    Usage:
        pipeline = RecipeExtractionPipeline(cache, extractor, validator, post_processor)
        result = await pipeline.extract(url="https://example.com/soup")
    """

    def __init__(
        self,
        cache: RecipeCache,
        extractor: AdaptiveExtractor,
        validator: RecipeValidator,
        post_processor: RecipePostProcessor,
        fetcher: BaseFetcher | None = None,
        storage: BaseStorageProvider | None = None,
        single_flight: SingleFlight | None = None,
    ) -> None:
        self._cache = cache
        self._extractor = extractor
        self._validator = validator
        self._post_processor = post_processor
        self._fetcher = fetcher
        self._storage = storage
        self._single_flight = single_flight

    @property
    def cache(self) -> RecipeCache:
        return self._cache

    async def extract(
        self,
        url: str | None = None,
        html: str | None = None,
        text: str | None = None,
        compression: Compression = "none",
        skip_cache: bool = False,
        folder_id: str | None = None,
        title: str | None = None,
    ) -> PipelineResult:
        """Extract recipes for one page.

        The fingerprint is taken over ``url`` when present, otherwise over
        the raw ``text`` (or inline ``html``).
        ``title`` names the stored file when the recipe has no title.

        Raises:
            ValueError: If no identifying input is given.
            ExtractionError: Any terminal pipeline failure.
            StorageError: If the storage upload fails.
        """
        fingerprint = compute_fingerprint(url=url, text=text or html)
        set_extraction_context(fingerprint, url)
        t0 = time.monotonic()
        try:
            result = await self._extract(
                fingerprint, url, html or text, compression, skip_cache
            )
            if folder_id and result.is_recipe and self._storage is not None:
                result.stored_files = await self._upload(
                    self._storage, folder_id, result.recipes, title
                )
            logger.info(
                "Extraction finished: is_recipe=%s, from_cache=%s, %d ms",
                result.is_recipe, result.from_cache,
                int((time.monotonic() - t0) * 1000),
            )
            return result
        finally:
            clear_context()

    async def _extract(
        self,
        fingerprint: str,
        url: str | None,
        html: str | None,
        compression: Compression,
        skip_cache: bool,
    ) -> PipelineResult:
        if not skip_cache:
            cached = await self._from_cache(fingerprint)
            if cached is not None:
                return cached
        else:
            logger.info("Cache bypass requested, re-extracting %s", fingerprint)

        async with AsyncExitStack() as stack:
            if self._single_flight is not None:
                await stack.enter_async_context(self._single_flight.hold(fingerprint))
                if not skip_cache:
                    cached = await self._from_cache(fingerprint)
                    if cached is not None:
                        return cached

            raw = await resolve_source(url, html, compression, self._fetcher)
            adaptive = await self._extractor.run(raw)
            verdict = adaptive.result

            if verdict.is_recipe:
                recipes = self._post_processor.process_all(verdict.recipes, url)
                serialized = self._validator.serialize_many(recipes)
            else:
                recipes, serialized = [], ""

            entry = await self._cache.put(fingerprint, serialized, verdict.is_recipe, url)
            return PipelineResult(
                fingerprint=fingerprint,
                is_recipe=verdict.is_recipe,
                strategy=adaptive.strategy,
                attempts=adaptive.total_attempts,
                serialized=serialized,
                recipes=recipes,
                version=entry.version if entry is not None else None,
                over_cleaned_suspected=adaptive.over_cleaned_suspected,
            )

    async def _from_cache(self, fingerprint: str) -> PipelineResult | None:
        entry = await self._cache.get(fingerprint)
        if entry is None:
            return None
        try:
            recipes = self._validator.deserialize(entry.serialized_result)
        except ValueError as e:
            logger.warning("Cached entry %s is unreadable, re-extracting: %s", fingerprint, e)
            return None
        logger.info("Returning cached result for %s (version %d)", fingerprint, entry.version)
        return self._cached_result(entry, recipes)

    @staticmethod
    def _cached_result(entry: CachedEntry, recipes: list[Recipe]) -> PipelineResult:
        return PipelineResult(
            fingerprint=entry.fingerprint,
            is_recipe=entry.is_valid,
            from_cache=True,
            serialized=entry.serialized_result,
            recipes=recipes,
            version=entry.version,
        )

    async def _upload(
        self,
        storage: BaseStorageProvider,
        folder_id: str,
        recipes: list[Recipe],
        title_hint: str | None,
    ) -> list[UploadResult]:
        uploads: list[UploadResult] = []
        for recipe in recipes:
            title = recipe.title
            if title_hint and title in ("", UNTITLED_RECIPE):
                title = title_hint
            file_name = generate_file_name(title)
            uploads.append(
                await storage.upload_or_update(
                    folder_id, file_name, self._validator.serialize(recipe)
                )
            )
        logger.info("Stored %d recipe file(s) in %s", len(uploads), folder_id)
        return uploads
