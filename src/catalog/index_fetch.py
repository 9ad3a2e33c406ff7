# src/catalog/index_fetch.py
"""Retrieve the registration index of one package."""

from __future__ import annotations

import logging

from rangefetch.cancellation import CancellationToken
from rangefetch.catalog.keys import index_cache_key, package_id_from_location
from rangefetch.catalog.models import CatalogIndex
from rangefetch.transport.http_source import CachedHttpSource, parse_json_document
from rangefetch.transport.models import CachedRequest

_default_logger = logging.getLogger(__name__)


async def fetch_index(
    source: CachedHttpSource,
    index_location: str,
    logger: logging.Logger | None = None,
    cancel: CancellationToken | None = None,
) -> CatalogIndex | None:
    """Fetch and parse the registration index at ``index_location``.

    Returns:
        The parsed index, or None when the server answers 404, meaning the
        package does not exist.

    Raises:
        TransportError: Network failure or unexpected status.
        CatalogParseError: The index is not a valid registration index.
        FetchCancelledError: ``cancel`` fired before completion.
    """
    log = logger or _default_logger
    package_id = package_id_from_location(index_location)

    def parse(body: bytes) -> CatalogIndex:
        return CatalogIndex.from_document(
            parse_json_document(body), package_id=package_id, location=index_location,
        )

    request = CachedRequest(
        location=index_location,
        cache_key=index_cache_key(package_id),
        ignore_not_found=True,
    )
    index = await source.get(request, parse, logger=log, cancel=cancel)

    if index is None:
        log.debug("No registration index for %s at %s", package_id, index_location)
        return None

    log.debug("Index for %s lists %d pages", package_id, len(index.pages))
    return index
