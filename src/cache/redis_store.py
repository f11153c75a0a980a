# src/cache/redis_store.py — v2
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install recipextract[redis].
Suitable for multi-instance deployments sharing one cache.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from recipextract.cache.base_cache_store import BaseCacheStore
from recipextract.cache.models import CachedEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "recipextract:cache:"
_INDEX_KEY = "recipextract:cache:__index__"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store. Entries are JSON strings; a set indexes keys."""

    def __init__(self, redis_url: str, client: Any = None) -> None:
        if client is None:
            try:
                import redis
            except ImportError as e:
                raise ImportError(
                    "redis package required: pip install redis"
                ) from e
            client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._client = client

    async def get(self, fingerprint: str) -> CachedEntry | None:
        data = self._client.get(f"{_KEY_PREFIX}{fingerprint}")
        if data is None:
            return None
        try:
            return CachedEntry.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", fingerprint, e)
            return None

    async def put(self, entry: CachedEntry) -> None:
        self._client.set(f"{_KEY_PREFIX}{entry.fingerprint}", entry.model_dump_json())
        self._client.sadd(_INDEX_KEY, entry.fingerprint)

    async def exists(self, fingerprint: str) -> bool:
        return bool(self._client.exists(f"{_KEY_PREFIX}{fingerprint}"))

    async def delete(self, fingerprint: str) -> bool:
        removed = self._client.delete(f"{_KEY_PREFIX}{fingerprint}")
        self._client.srem(_INDEX_KEY, fingerprint)
        return bool(removed)

    async def count(self) -> int:
        return int(self._client.scard(_INDEX_KEY))

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
