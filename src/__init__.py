"""Selective retrieval of package registration catalog pages."""

from rangefetch.api.facade import fetch_range_pages, open_source
from rangefetch.cancellation import CancellationToken
from rangefetch.errors import (
    CatalogParseError,
    FetchCancelledError,
    InvalidRangeFormatError,
    InvalidVersionError,
    RangeFetchError,
    ResourceNotFoundError,
    TransportError,
)
from rangefetch.version import __version__
from rangefetch.versioning.models import VersionRange
from rangefetch.versioning.range_parser import parse_version_range

__all__ = [
    "CancellationToken",
    "CatalogParseError",
    "FetchCancelledError",
    "InvalidRangeFormatError",
    "InvalidVersionError",
    "RangeFetchError",
    "ResourceNotFoundError",
    "TransportError",
    "VersionRange",
    "__version__",
    "fetch_range_pages",
    "open_source",
    "parse_version_range",
]
