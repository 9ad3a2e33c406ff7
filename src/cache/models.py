# src/cache/models.py
"""Cache domain model: one cached HTTP response body per cache key."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry(BaseModel):
    """Raw response body stored under a derived cache key."""

    key: str
    location: str
    body: str
    fetched_at: datetime = Field(default_factory=_utcnow)

    def age_seconds(self, now: datetime | None = None) -> float:
        """Seconds elapsed since the body was fetched."""
        now = now or _utcnow()
        fetched = self.fetched_at
        if fetched.tzinfo is None:
            fetched = fetched.replace(tzinfo=timezone.utc)
        return (now - fetched).total_seconds()

    def is_fresh(self, max_age_s: float | None, now: datetime | None = None) -> bool:
        """Whether the entry may be served. ``None`` means no expiry."""
        if max_age_s is None:
            return True
        return self.age_seconds(now) <= max_age_s
