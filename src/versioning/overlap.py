# src/versioning/overlap.py
"""Decide whether a catalog page can hold a version the caller wants."""

from __future__ import annotations

from rangefetch.versioning.nuget_version import NuGetVersion

from rangefetch.versioning.models import VersionRange


def must_fetch(
    requested: VersionRange, page_lower: NuGetVersion, page_upper: NuGetVersion
) -> bool:
    """Whether the page ``[page_lower, page_upper]`` may satisfy ``requested``.

    Page bounds are always closed. For a requested range bounded on both
    sides only the requested endpoints are tested against the page; this
    covers the case where both requested bounds are exclusive. Otherwise the
    page endpoints are tested against the requested range.
    """
    page_range = VersionRange.closed(page_lower, page_upper)

    if requested.has_lower_and_upper_bounds:
        return page_range.satisfies(requested.min_version) or page_range.satisfies(
            requested.max_version
        )

    return requested.satisfies(page_lower) or requested.satisfies(page_upper)
