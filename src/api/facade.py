# src/api/facade.py
"""Public API facade: fetch the registration pages a version range needs.

Usage:
    from rangefetch.api.facade import fetch_range_pages, open_source

    async with open_source() as source:
        pages = await fetch_range_pages(
            source, "https://host/registration/newtonsoft.json/index.json", "[12.0, 13.0)",
        )
"""

from __future__ import annotations

import logging
import uuid

from rangefetch.cache.cache_factory import create_cache_store
from rangefetch.cancellation import CancellationToken
from rangefetch.catalog.index_fetch import fetch_index
from rangefetch.catalog.keys import package_id_from_location
from rangefetch.catalog.models import PageDocument
from rangefetch.catalog.page_fetch import fetch_relevant_pages
from rangefetch.config.settings import Settings
from rangefetch.logging.context import request_context
from rangefetch.transport.http_source import CachedHttpSource
from rangefetch.versioning.models import VersionRange
from rangefetch.versioning.range_parser import parse_version_range

__all__ = ["fetch_range_pages", "open_source", "parse_version_range"]

_default_logger = logging.getLogger(__name__)


async def fetch_range_pages(
    source: CachedHttpSource,
    registration_location: str,
    requested_range: VersionRange | str | None = None,
    logger: logging.Logger | None = None,
    cancel: CancellationToken | None = None,
) -> list[PageDocument]:
    """Fetch only the catalog pages that may satisfy ``requested_range``.

    Args:
        source: Cached HTTP source (carries the cache store and settings).
        registration_location: URL of the package registration index.
        requested_range: Range or range expression. None or "" means any
            version, pre-releases included.
        logger: Logger for diagnostics. Defaults to the module logger.
        cancel: Cancellation token observed by every fetch.

    Returns:
        Page documents in index order. Empty when the package does not
        exist.

    Raises:
        InvalidRangeFormatError: ``requested_range`` cannot be parsed.
        TransportError: Index or page fetch failed.
        CatalogParseError: Index or page document is malformed.
        FetchCancelledError: ``cancel`` fired.
    """
    log = logger or _default_logger
    if isinstance(requested_range, VersionRange):
        requested = requested_range
    else:
        requested = parse_version_range(requested_range)

    package_id = package_id_from_location(registration_location)
    with request_context(uuid.uuid4().hex[:12], package_id):
        log.info("Fetching %s pages for range %s", package_id, requested)

        index = await fetch_index(source, registration_location, logger=log, cancel=cancel)
        if index is None:
            log.info("Package %s does not exist", package_id)
            return []

        pages = await fetch_relevant_pages(
            source, index, requested, logger=log, cancel=cancel,
        )
        log.info(
            "Fetched %d of %d pages for %s", len(pages), len(index.pages), package_id,
        )
        return pages


def open_source(settings: Settings | None = None) -> CachedHttpSource:
    """Build a CachedHttpSource with the configured cache backend.

    The returned source owns its HTTP client and cache store; close it with
    ``aclose()`` or use it as an async context manager.
    """
    settings = settings or Settings()
    return CachedHttpSource(
        cache_store=create_cache_store(settings),
        settings=settings,
        owns_cache=True,
    )
