# src/cache/cache_factory.py
"""Factory for cache store instantiation."""

from __future__ import annotations

from rangefetch.cache.base_cache_store import BaseCacheStore
from rangefetch.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore | None:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore implementation, or None when caching is
        disabled.
    """
    if settings is not None and not settings.cache_enabled:
        return None

    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from rangefetch.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if backend == "json":
        from rangefetch.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=settings.cache_root)

    if backend == "sqlite":
        from rangefetch.cache.sqlite_store import SqliteCacheStore
        db_path = settings.cache_root.expanduser() / "rangefetch_cache.db"
        return SqliteCacheStore(db_path=db_path)

    if backend == "redis":
        from rangefetch.cache.redis_store import RedisCacheStore
        if not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        ttl = int(settings.cache_max_age_s) if settings.cache_max_age_s else None
        return RedisCacheStore(redis_url=settings.cache_redis_url, ttl_s=ttl)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
