# src/transport/models.py
"""Request model for cache-mediated HTTP retrieval."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CachedRequest(BaseModel):
    """One GET whose response body is cached under ``cache_key``."""

    location: str
    cache_key: str
    ignore_not_found: bool = False
    # None = source default; 0 = never serve from cache (still refreshes it)
    max_age_s: float | None = Field(default=None, ge=0)
