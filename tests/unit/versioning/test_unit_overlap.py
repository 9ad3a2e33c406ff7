# tests/unit/versioning/test_unit_overlap.py
"""Tests for versioning/overlap.py: page pruning decision."""

from __future__ import annotations

import pytest

from rangefetch.versioning.models import VersionRange
from rangefetch.versioning.nuget_version import NuGetVersion
from rangefetch.versioning.overlap import must_fetch
from rangefetch.versioning.range_parser import parse_version_range

V = NuGetVersion.parse

PAGES = [
    (V("1.0"), V("2.0")),
    (V("2.0"), V("3.0")),
    (V("3.0"), V("4.0")),
]


def _selected(expression: str) -> list[int]:
    requested = parse_version_range(expression)
    return [i for i, (low, high) in enumerate(PAGES, start=1) if must_fetch(requested, low, high)]


class TestSelection:
    def test_open_ended_minimum(self):
        assert _selected("[2.5, )") == [2, 3]

    def test_single_point(self):
        assert _selected("[1.5,1.5]") == [1]

    def test_default_range_selects_everything(self):
        assert _selected("") == [1, 2, 3]

    def test_upper_only(self):
        assert _selected("(, 1.5]") == [1]

    def test_exclusive_upper_on_boundary(self):
        # page 2 starts at 2.0, which "(,2.0)" excludes
        assert _selected("(, 2.0)") == [1]

    def test_bounded_on_shared_boundary(self):
        assert _selected("[2.0, 2.0]") == [1, 2]

    def test_beyond_catalog(self):
        assert _selected("[5.0, )") == []
        assert _selected("[5.0, 6.0]") == []


class TestBoundedBranch:
    def test_page_strictly_contains_requested(self):
        requested = parse_version_range("[1.2, 1.8]")
        assert must_fetch(requested, V("1.0"), V("2.0")) is True

    def test_requested_strictly_contains_page_is_not_fetched(self):
        # Only the requested endpoints are tested against the page.
        requested = parse_version_range("[1.0, 5.0]")
        assert must_fetch(requested, V("2.0"), V("3.0")) is False

    def test_both_exclusive_bounds(self):
        requested = parse_version_range("(1.0, 3.0)")
        assert must_fetch(requested, V("0.5"), V("1.0")) is True
        assert must_fetch(requested, V("3.0"), V("4.0")) is True

    def test_one_endpoint_inside_page(self):
        requested = parse_version_range("[1.5, 10.0)")
        assert must_fetch(requested, V("1.0"), V("2.0")) is True


class TestOpenBranch:
    def test_page_endpoint_inside_requested(self):
        requested = VersionRange(min_version=V("3.5"), min_inclusive=True)
        assert must_fetch(requested, V("3.0"), V("4.0")) is True

    def test_exclusive_min_equal_to_page_upper(self):
        requested = VersionRange(min_version=V("2.0"), min_inclusive=False)
        assert must_fetch(requested, V("1.0"), V("2.0")) is False

    def test_unbounded_matches_any_page(self):
        assert must_fetch(VersionRange(), V("0.1"), V("0.2")) is True


class TestParity:
    @pytest.mark.parametrize(
        ("open_expr", "bounded_expr", "page"),
        [
            ("[5.0, )", "[5.0, 6.0]", (V("1.0"), V("2.0"))),
            ("(, 1.0)", "[0.1, 1.0)", (V("2.0"), V("3.0"))),
            ("[3.0, )", "[3.0, 9.0]", (V("1.0"), V("2.9"))),
        ],
    )
    def test_page_outside_both_is_skipped_by_both(self, open_expr, bounded_expr, page):
        low, high = page
        assert must_fetch(parse_version_range(open_expr), low, high) is False
        assert must_fetch(parse_version_range(bounded_expr), low, high) is False

    def test_never_raises_on_degenerate_page(self):
        assert must_fetch(parse_version_range("[1.0]"), V("1.0"), V("1.0")) is True
