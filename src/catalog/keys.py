# src/catalog/keys.py
"""Cache keys and package identifiers derived from catalog locations.

Keys depend only on the package id and, for range pages, the normalized page
bounds, so the same logical resource always maps to the same cache slot and
two distinct pages never share one.
"""

from __future__ import annotations

from rangefetch.versioning.nuget_version import NuGetVersion


def package_id_from_location(location: str) -> str:
    """Return the path segment right before the last one.

    ``https://host/registration/newtonsoft.json/index.json`` gives
    ``newtonsoft.json``. Empty segments are ignored.
    """
    parts = [part for part in location.split("/") if part]
    if len(parts) < 2:
        raise ValueError(f"Cannot derive a package id from {location!r}")
    return parts[-2]


def index_cache_key(package_id: str) -> str:
    return f"list_{package_id}_index"


def range_cache_key(package_id: str, lower: NuGetVersion, upper: NuGetVersion) -> str:
    return (
        f"list_{package_id}_range_"
        f"{lower.to_normalized_string()}-{upper.to_normalized_string()}"
    )
