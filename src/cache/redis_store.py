# src/cache/redis_store.py
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Lets several resolver processes share one catalog cache.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from rangefetch.cache.base_cache_store import BaseCacheStore
from rangefetch.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "rangefetch:cache:"
_INDEX_KEY = "rangefetch:cache:__index__"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for shared deployments."""

    def __init__(self, redis_url: str, ttl_s: int | None = None) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._ttl_s = ttl_s

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return CacheEntry(**json.loads(data))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry."""
        redis_key = f"{_KEY_PREFIX}{key}"
        self._client.set(redis_key, entry.model_dump_json(), ex=self._ttl_s)
        # Maintain a set of all cache keys for list_keys
        self._client.sadd(_INDEX_KEY, key)

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._client.delete(f"{_KEY_PREFIX}{key}")
        self._client.srem(_INDEX_KEY, key)

    async def list_keys(self) -> list[str]:
        """List all cached keys that still hold an entry."""
        keys = self._client.smembers(_INDEX_KEY)
        return sorted(k for k in keys if self._client.exists(f"{_KEY_PREFIX}{k}"))

    async def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
