# src/cache/base_cache_store.py — v2
"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from recipextract.cache.models import CachedEntry


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends, keyed by fingerprint."""

    @abstractmethod
    async def get(self, fingerprint: str) -> CachedEntry | None:
        """Retrieve the entry for a fingerprint."""

    @abstractmethod
    async def put(self, entry: CachedEntry) -> None:
        """Store an entry (upsert on ``entry.fingerprint``)."""

    @abstractmethod
    async def exists(self, fingerprint: str) -> bool:
        """Whether an entry is stored for the fingerprint."""

    @abstractmethod
    async def delete(self, fingerprint: str) -> bool:
        """Remove an entry. Returns True if something was deleted."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored entries."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""
