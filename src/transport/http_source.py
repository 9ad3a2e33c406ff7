# src/transport/http_source.py
"""Cache-mediated HTTP source for catalog documents.

``CachedHttpSource.get`` serves a fresh cached body when one exists,
otherwise issues a GET with httpx, parses the body and stores it under the
request's cache key. A 404 yields ``None`` for requests that ignore
not-found; every other failure raises. No retries are attempted here.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

import httpx

from rangefetch.cache.base_cache_store import BaseCacheStore
from rangefetch.cache.models import CacheEntry
from rangefetch.cancellation import CancellationToken
from rangefetch.config.settings import Settings
from rangefetch.errors import (
    CatalogParseError,
    ResourceNotFoundError,
    TransportError,
)
from rangefetch.transport.models import CachedRequest

_default_logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_json_document(body: bytes) -> dict[str, Any]:
    """Parse a response body holding a JSON object."""
    document = json.loads(body)
    if not isinstance(document, dict):
        raise ValueError(
            f"expected a JSON object, got {type(document).__name__}"
        )
    return document


class CachedHttpSource:
    """HTTP GET through an optional cache store."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        cache_store: BaseCacheStore | None = None,
        settings: Settings | None = None,
        max_age_s: float | None = None,
        owns_cache: bool = False,
    ) -> None:
        self._settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._settings.http_timeout_s,
            follow_redirects=self._settings.http_follow_redirects,
            headers={
                "User-Agent": self._settings.http_user_agent,
                "Accept": "application/json",
            },
        )
        self._cache = cache_store
        self._owns_cache = owns_cache
        self._max_age_s = (
            max_age_s if max_age_s is not None else self._settings.cache_max_age_s
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache_store(self) -> BaseCacheStore | None:
        return self._cache

    async def get(
        self,
        request: CachedRequest,
        parse: Callable[[bytes], T],
        logger: logging.Logger | None = None,
        cancel: CancellationToken | None = None,
    ) -> T | None:
        """Fetch and parse ``request.location``.

        Returns:
            The parsed document, or None when the resource does not exist
            and ``request.ignore_not_found`` is set.

        Raises:
            ResourceNotFoundError: 404 on a request that does not ignore it.
            TransportError: Network failure or non-success status.
            CatalogParseError: ``parse`` rejected the body.
            FetchCancelledError: ``cancel`` fired before completion.
        """
        log = logger or _default_logger
        location = request.location
        if cancel is not None:
            cancel.raise_if_cancelled(location)

        cached = await self._read_cache(request, parse, log)
        if cached is not None:
            return cached

        response = await self._send(location, cancel)

        if response.status_code == httpx.codes.NOT_FOUND:
            if request.ignore_not_found:
                log.debug("Not found: %s", location)
                return None
            raise ResourceNotFoundError(location)

        if not response.is_success:
            raise TransportError(
                location, response.reason_phrase or "unexpected status",
                status_code=response.status_code,
            )

        body = response.content
        text = self._decode(location, body)
        document = self._parse(location, body, parse)

        if cancel is not None:
            cancel.raise_if_cancelled(location)

        if self._cache is not None:
            await self._cache.put(
                request.cache_key,
                CacheEntry(
                    key=request.cache_key,
                    location=location,
                    body=text,
                ),
            )
        log.debug("Fetched %s (%d bytes) -> %s", location, len(body), request.cache_key)
        return document

    async def aclose(self) -> None:
        """Close the HTTP client and cache store this source owns."""
        if self._owns_client:
            await self._client.aclose()
        if self._owns_cache and self._cache is not None:
            await self._cache.close()

    async def __aenter__(self) -> CachedHttpSource:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _read_cache(
        self,
        request: CachedRequest,
        parse: Callable[[bytes], T],
        log: logging.Logger,
    ) -> T | None:
        """Return the parsed cached body if a fresh entry exists."""
        if self._cache is None:
            return None

        max_age = request.max_age_s if request.max_age_s is not None else self._max_age_s
        if max_age == 0:
            return None

        entry = await self._cache.get(request.cache_key)
        if entry is None or not entry.is_fresh(max_age):
            return None

        try:
            document = self._parse(request.location, entry.body.encode("utf-8"), parse)
        except CatalogParseError as e:
            log.warning("Dropping corrupt cache entry %s: %s", request.cache_key, e)
            await self._cache.delete(request.cache_key)
            return None

        log.debug("Cache hit: %s", request.cache_key)
        return document

    async def _send(
        self, location: str, cancel: CancellationToken | None
    ) -> httpx.Response:
        try:
            if cancel is None:
                return await self._client.get(location)
            return await cancel.run(self._client.get(location), location)
        except httpx.HTTPError as e:
            raise TransportError(location, str(e) or type(e).__name__) from e

    @staticmethod
    def _decode(location: str, body: bytes) -> str:
        """Decode a UTF-8 body, leading BOM allowed."""
        try:
            return body.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CatalogParseError(location, f"body is not valid UTF-8: {e.reason}") from e

    @staticmethod
    def _parse(location: str, body: bytes, parse: Callable[[bytes], T]) -> T:
        try:
            return parse(body)
        except CatalogParseError:
            raise
        except (ValueError, TypeError, KeyError) as e:
            raise CatalogParseError(location, str(e)) from e
