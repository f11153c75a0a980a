# src/cache/json_store.py — v2
"""JSON file-based cache store (default CACHE_BACKEND=json).

Stores one JSON file per fingerprint under CACHE_ROOT.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from recipextract.cache.base_cache_store import BaseCacheStore
from recipextract.cache.models import CachedEntry

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def get(self, fingerprint: str) -> CachedEntry | None:
        path = self._entry_path(fingerprint)
        if not path.exists():
            return None
        try:
            return CachedEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning("Failed to read cache entry %s: %s", fingerprint, e)
            return None

    async def put(self, entry: CachedEntry) -> None:
        path = self._entry_path(entry.fingerprint)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)

    async def exists(self, fingerprint: str) -> bool:
        return self._entry_path(fingerprint).exists()

    async def delete(self, fingerprint: str) -> bool:
        path = self._entry_path(fingerprint)
        if path.exists():
            path.unlink()
            return True
        return False

    async def count(self) -> int:
        if not self._root.is_dir():
            return 0
        return sum(1 for _ in self._root.glob("*.json"))

    def _entry_path(self, fingerprint: str) -> Path:
        """Return file path for a fingerprint."""
        safe_key = fingerprint.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_key}.json"
