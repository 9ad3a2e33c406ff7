# tests/unit/cache/test_unit_cache_models.py
"""Tests for cache/models.py: CacheEntry freshness."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from rangefetch.cache.models import CacheEntry

_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _entry(age_s: float) -> CacheEntry:
    return CacheEntry(
        key="list_pkg_index",
        location="https://api.test/pkg/index.json",
        body="{}",
        fetched_at=_NOW - timedelta(seconds=age_s),
    )


class TestCacheEntry:
    def test_default_fetched_at_is_utc(self):
        entry = CacheEntry(key="k", location="u", body="{}")
        assert entry.fetched_at.tzinfo is not None

    def test_age_seconds(self):
        assert _entry(90).age_seconds(now=_NOW) == 90

    def test_naive_timestamp_treated_as_utc(self):
        entry = CacheEntry(
            key="k", location="u", body="{}",
            fetched_at=datetime(2026, 3, 1, 11, 59, 0),
        )
        assert entry.age_seconds(now=_NOW) == 60

    def test_fresh_within_max_age(self):
        assert _entry(10).is_fresh(60, now=_NOW) is True

    def test_stale_past_max_age(self):
        assert _entry(61).is_fresh(60, now=_NOW) is False

    def test_no_max_age_never_expires(self):
        assert _entry(10**7).is_fresh(None, now=_NOW) is True
