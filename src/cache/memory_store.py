# src/cache/memory_store.py
"""In-process cache store (CACHE_BACKEND=memory).

Entries live for the lifetime of the store object only.
"""

from __future__ import annotations

from rangefetch.cache.base_cache_store import BaseCacheStore
from rangefetch.cache.models import CacheEntry


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    async def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def list_keys(self) -> list[str]:
        return sorted(self._entries)
