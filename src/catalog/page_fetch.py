# src/catalog/page_fetch.py
"""Fetch the catalog pages that may satisfy a requested version range.

Pages are pruned with ``must_fetch``. Inline pages are taken as they are;
remote pages are fetched concurrently inside one ``asyncio.TaskGroup``, so
either every fetch completes or the whole call fails. Pages that no longer
exist (404) contribute nothing. The result keeps the index order whatever
the completion order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterator

from rangefetch.cancellation import CancellationToken
from rangefetch.catalog.models import CatalogIndex, PageDescriptor, PageDocument
from rangefetch.errors import FetchCancelledError
from rangefetch.logging.context import set_page_context
from rangefetch.transport.http_source import CachedHttpSource, parse_json_document
from rangefetch.transport.models import CachedRequest
from rangefetch.versioning.models import VersionRange
from rangefetch.versioning.overlap import must_fetch

_default_logger = logging.getLogger(__name__)


async def fetch_relevant_pages(
    source: CachedHttpSource,
    index: CatalogIndex,
    requested: VersionRange,
    logger: logging.Logger | None = None,
    cancel: CancellationToken | None = None,
    max_concurrency: int | None = None,
) -> list[PageDocument]:
    """Return the page documents of ``index`` that may satisfy ``requested``.

    Args:
        source: Cached HTTP source used for remote pages.
        index: Parsed registration index.
        requested: Version range the caller needs to resolve.
        logger: Logger for diagnostics. Defaults to the module logger.
        cancel: Cancellation token shared by all page fetches.
        max_concurrency: Cap on simultaneous page fetches. None uses
            ``settings.fetch_max_concurrency``; 0 means no cap.

    Raises:
        FetchCancelledError: ``cancel`` fired; takes precedence over other
            failures raised by sibling fetches.
        TransportError, CatalogParseError: First failing page fetch.
    """
    log = logger or _default_logger
    limit = (
        max_concurrency if max_concurrency is not None
        else source.settings.fetch_max_concurrency
    )
    semaphore = asyncio.Semaphore(limit) if limit > 0 else None

    slots: list[PageDocument | asyncio.Task[PageDocument | None]] = []
    try:
        async with asyncio.TaskGroup() as group:
            for page in index.pages:
                if not must_fetch(requested, page.lower, page.upper):
                    log.debug("Skipping page [%s, %s]", page.lower, page.upper)
                    continue

                if page.inline_page is not None:
                    slots.append(page.inline_page)
                    continue

                slots.append(
                    group.create_task(
                        _fetch_page(source, index.package_id, page, semaphore, log, cancel)
                    )
                )
    except ExceptionGroup as failures:
        raise _primary_failure(failures) from failures

    pages: list[PageDocument] = []
    for slot in slots:
        if isinstance(slot, asyncio.Task):
            document = slot.result()
            if document is None:
                continue
            pages.append(document)
        else:
            pages.append(slot)
    return pages


async def _fetch_page(
    source: CachedHttpSource,
    package_id: str,
    page: PageDescriptor,
    semaphore: asyncio.Semaphore | None,
    log: logging.Logger,
    cancel: CancellationToken | None,
) -> PageDocument | None:
    set_page_context(f"{page.lower}-{page.upper}")
    request = CachedRequest(
        location=page.id,
        cache_key=page.range_cache_key(package_id),
        ignore_not_found=True,
    )
    if semaphore is None:
        return await source.get(request, parse_json_document, logger=log, cancel=cancel)
    async with semaphore:
        return await source.get(request, parse_json_document, logger=log, cancel=cancel)


def _primary_failure(failures: BaseExceptionGroup) -> BaseException:
    """Pick the error to surface: cancellation first, else the first leaf."""
    leaves = list(_leaves(failures))
    for error in leaves:
        if isinstance(error, FetchCancelledError):
            return error
    return leaves[0]


def _leaves(group: BaseExceptionGroup) -> Iterator[BaseException]:
    for error in group.exceptions:
        if isinstance(error, BaseExceptionGroup):
            yield from _leaves(error)
        else:
            yield error
