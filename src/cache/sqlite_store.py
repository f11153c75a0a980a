# src/cache/sqlite_store.py — v2
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3 with one row per fingerprint; ``version`` and the
timestamps are real columns so maintenance queries need no JSON parsing.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from recipextract.cache.base_cache_store import BaseCacheStore
from recipextract.cache.models import CachedEntry

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS recipe_cache (
    fingerprint TEXT PRIMARY KEY,
    serialized_result TEXT NOT NULL,
    is_valid INTEGER NOT NULL,
    source_url TEXT,
    created_at TEXT NOT NULL,
    last_updated_at TEXT NOT NULL,
    version INTEGER NOT NULL DEFAULT 0
);
"""

_COLUMNS = (
    "fingerprint, serialized_result, is_valid, source_url, "
    "created_at, last_updated_at, version"
)


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, fingerprint: str) -> CachedEntry | None:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM recipe_cache WHERE fingerprint = ?",
            (fingerprint,),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return CachedEntry(
            fingerprint=row[0],
            serialized_result=row[1],
            is_valid=bool(row[2]),
            source_url=row[3],
            created_at=datetime.fromisoformat(row[4]),
            last_updated_at=datetime.fromisoformat(row[5]),
            version=row[6],
        )

    async def put(self, entry: CachedEntry) -> None:
        """Store an entry (upsert)."""
        self._conn.execute(
            f"INSERT OR REPLACE INTO recipe_cache ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                entry.fingerprint,
                entry.serialized_result,
                int(entry.is_valid),
                entry.source_url,
                entry.created_at.isoformat(),
                entry.last_updated_at.isoformat(),
                entry.version,
            ),
        )
        self._conn.commit()

    async def exists(self, fingerprint: str) -> bool:
        cursor = self._conn.execute(
            "SELECT 1 FROM recipe_cache WHERE fingerprint = ?", (fingerprint,)
        )
        return cursor.fetchone() is not None

    async def delete(self, fingerprint: str) -> bool:
        cursor = self._conn.execute(
            "DELETE FROM recipe_cache WHERE fingerprint = ?", (fingerprint,)
        )
        self._conn.commit()
        return cursor.rowcount > 0

    async def count(self) -> int:
        cursor = self._conn.execute("SELECT COUNT(*) FROM recipe_cache")
        return int(cursor.fetchone()[0])

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
