# src/cache/recipe_cache.py — v2
"""Best-effort cache layer in front of a BaseCacheStore.

Read failures are misses and write failures are logged; neither fails an
extraction. A put whose version lookup fails is skipped. Versions start
at 0 and increment on every overwrite of an existing fingerprint.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from recipextract.cache.base_cache_store import BaseCacheStore
from recipextract.cache.models import CachedEntry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecipeCache:
    """Get/put by fingerprint with version bookkeeping."""

    def __init__(
        self,
        store: BaseCacheStore,
        enabled: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._enabled = enabled
        self._clock = clock

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    async def get(self, fingerprint: str) -> CachedEntry | None:
        """Return the stored entry, or None on miss, when disabled, or on read error."""
        if not self._enabled:
            return None
        try:
            entry = await self._store.get(fingerprint)
        except Exception as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", fingerprint, e)
            return None
        if entry is None:
            logger.debug("Cache miss for %s", fingerprint)
        else:
            logger.debug("Cache hit for %s (version %d)", fingerprint, entry.version)
        return entry

    async def put(
        self,
        fingerprint: str,
        serialized_result: str,
        is_valid: bool,
        source_url: str | None = None,
    ) -> CachedEntry | None:
        """Store a result, overwriting (version + 1) any existing entry.

        Returns the stored entry, or None when disabled or when the write failed.
        """
        if not self._enabled:
            return None
        now = self._clock()
        # Versions never move backwards: no write without a successful lookup
        try:
            existing = await self._store.get(fingerprint)
        except Exception as e:
            logger.error(
                "Cache read before write failed for %s, skipping write: %s", fingerprint, e
            )
            return None
        if existing is not None:
            entry = existing.with_updated_version(serialized_result, is_valid, now)
            if source_url:
                entry = entry.model_copy(update={"source_url": source_url})
        else:
            entry = CachedEntry(
                fingerprint=fingerprint,
                serialized_result=serialized_result,
                is_valid=is_valid,
                source_url=source_url,
                created_at=now,
                last_updated_at=now,
                version=0,
            )
        try:
            await self._store.put(entry)
        except Exception as e:
            logger.error("Cache write failed for %s: %s", fingerprint, e)
            return None
        logger.info(
            "Cached result for %s (valid=%s, version=%d)",
            fingerprint, is_valid, entry.version,
        )
        return entry
