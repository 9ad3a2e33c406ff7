# tests/unit/catalog/test_unit_keys.py
"""Tests for catalog/keys.py: package ids and cache keys."""

from __future__ import annotations

import pytest

from rangefetch.catalog.keys import index_cache_key, package_id_from_location, range_cache_key
from rangefetch.versioning.nuget_version import NuGetVersion


class TestPackageIdFromLocation:
    def test_registration_url(self):
        url = "https://api.nuget.test/v3/registration5-gz-semver2/newtonsoft.json/index.json"
        assert package_id_from_location(url) == "newtonsoft.json"

    def test_trailing_slash_ignored(self):
        assert package_id_from_location("https://host/reg/pkg/index.json/") == "pkg"

    def test_relative_path(self):
        assert package_id_from_location("pkg/index.json") == "pkg"

    def test_too_short(self):
        with pytest.raises(ValueError, match="package id"):
            package_id_from_location("index.json")


class TestCacheKeys:
    def test_index_key(self):
        assert index_cache_key("newtonsoft.json") == "list_newtonsoft.json_index"

    def test_range_key_uses_normalized_versions(self):
        key = range_cache_key("pkg", NuGetVersion.parse("1.0.0-Beta"), NuGetVersion.parse("2.0.0"))
        assert key == "list_pkg_range_1.0.0-Beta-2.0.0"

    def test_equal_bounds_share_a_key(self):
        assert range_cache_key("pkg", NuGetVersion.parse("1.0"), NuGetVersion.parse("2")) == (
            range_cache_key("pkg", NuGetVersion.parse("1.0.0.0"), NuGetVersion.parse("2.0.0"))
        )

    def test_distinct_pages_distinct_keys(self):
        keys = {
            range_cache_key("pkg", NuGetVersion.parse(low), NuGetVersion.parse(high))
            for low, high in [("1.0", "2.0"), ("2.0", "3.0"), ("1.0", "3.0")]
        }
        assert len(keys) == 3
