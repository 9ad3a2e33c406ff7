"""Version range model, parser and page overlap decision."""

from rangefetch.versioning.models import VersionRange
from rangefetch.versioning.nuget_version import NuGetVersion
from rangefetch.versioning.overlap import must_fetch
from rangefetch.versioning.range_parser import parse_version, parse_version_range

__all__ = [
    "NuGetVersion",
    "VersionRange",
    "must_fetch",
    "parse_version",
    "parse_version_range",
]
