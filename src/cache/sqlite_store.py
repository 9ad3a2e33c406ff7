# src/cache/sqlite_store.py
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency.
Better than JSON files once a cache holds many packages.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from rangefetch.cache.base_cache_store import BaseCacheStore
from rangefetch.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    location TEXT NOT NULL,
    body TEXT NOT NULL,
    fetched_at TEXT NOT NULL
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        cursor = self._conn.execute(
            "SELECT location, body, fetched_at FROM cache_entries WHERE key = ?",
            (key,),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return CacheEntry(
                key=key,
                location=row[0],
                body=row[1],
                fetched_at=datetime.fromisoformat(row[2]),
            )
        except ValueError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry (upsert)."""
        self._conn.execute(
            """INSERT OR REPLACE INTO cache_entries
               (key, location, body, fetched_at)
               VALUES (?, ?, ?, ?)""",
            (key, entry.location, entry.body, entry.fetched_at.isoformat()),
        )
        self._conn.commit()

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
        self._conn.commit()

    async def list_keys(self) -> list[str]:
        """List all cached keys."""
        cursor = self._conn.execute("SELECT key FROM cache_entries ORDER BY key")
        return [row[0] for row in cursor.fetchall()]

    async def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
