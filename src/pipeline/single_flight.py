# src/pipeline/single_flight.py — v1
"""Per-fingerprint mutual exclusion for concurrent identical requests.

Only one extraction per fingerprint runs at a time in this process;
waiters re-check the cache once they get the lock. Locks are dropped as
soon as nobody holds or awaits them.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class SingleFlight:
    """Registry of asyncio.Lock objects keyed by fingerprint."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        if lock.locked():
            logger.debug("Waiting for in-flight extraction of %s", key)
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def in_flight(self) -> int:
        """Number of fingerprints currently held or awaited."""
        return len(self._locks)
