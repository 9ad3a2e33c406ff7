# src/cache/base_cache_store.py
"""Abstract cache store interface.

Stores must tolerate concurrent calls for disjoint keys. Cache keys are
derived from the package id and page bounds, so two distinct resources never
share a key and no cross-key locking is needed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rangefetch.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""

    @abstractmethod
    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store cache entry."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove cache entry."""

    @abstractmethod
    async def list_keys(self) -> list[str]:
        """List all cached keys."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
