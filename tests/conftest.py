# tests/conftest.py
"""Shared test fixtures for all unit and integration tests.

Provides an in-process fake registration server (served through
httpx.MockTransport), cache stores and a ready-to-use CachedHttpSource.
No network access: all HTTP is mocked.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import httpx
import pytest

from rangefetch.cache.memory_store import MemoryCacheStore
from rangefetch.config.settings import Settings
from rangefetch.transport.http_source import CachedHttpSource

REGISTRATION_BASE = "https://api.test/v3/registration"


class FakeRegistry:
    """Serves registration documents by URL; unknown URLs answer 404."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any]] = {}
        self.delays: dict[str, float] = {}
        self.requests: list[str] = []

    # --- document builders ---

    @staticmethod
    def index_url(package: str) -> str:
        return f"{REGISTRATION_BASE}/{package}/index.json"

    @staticmethod
    def page_url(package: str, lower: str, upper: str) -> str:
        return f"{REGISTRATION_BASE}/{package}/page/{lower}/{upper}.json"

    def page_item(
        self, package: str, lower: str, upper: str, inline: bool = False
    ) -> dict[str, Any]:
        item: dict[str, Any] = {
            "@id": self.page_url(package, lower, upper),
            "lower": lower,
            "upper": upper,
            "count": 2,
        }
        if inline:
            item["items"] = self.leaves(package, lower, upper)
        return item

    @staticmethod
    def leaves(package: str, lower: str, upper: str) -> list[dict[str, Any]]:
        return [
            {"catalogEntry": {"id": package, "version": lower}},
            {"catalogEntry": {"id": package, "version": upper}},
        ]

    # --- routes ---

    def add_json(self, url: str, document: Any, status: int = 200) -> None:
        self.routes[url] = (status, document)

    def add_error(self, url: str, error: Exception) -> None:
        self.routes[url] = (0, error)

    def add_index(self, package: str, items: list[dict[str, Any]]) -> str:
        url = self.index_url(package)
        self.add_json(url, {"@id": url, "count": len(items), "items": items})
        return url

    def add_page(self, package: str, lower: str, upper: str) -> str:
        url = self.page_url(package, lower, upper)
        self.add_json(url, {
            "@id": url,
            "lower": lower,
            "upper": upper,
            "items": self.leaves(package, lower, upper),
        })
        return url

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        delay = self.delays.get(url)
        if delay:
            await asyncio.sleep(delay)
        if url not in self.routes:
            return httpx.Response(404, request=request)
        status, payload = self.routes[url]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload, request=request)
        return httpx.Response(status, json=payload, request=request)


# === FIXTURES ===


@pytest.fixture
def registry() -> FakeRegistry:
    """Empty fake registration server."""
    return FakeRegistry()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, cache_backend="memory")


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def mock_client(registry: FakeRegistry) -> httpx.AsyncClient:
    """httpx client routed to the fake registry."""
    return httpx.AsyncClient(transport=httpx.MockTransport(registry.handler))


@pytest.fixture
def source(
    mock_client: httpx.AsyncClient,
    memory_store: MemoryCacheStore,
    settings: Settings,
) -> CachedHttpSource:
    """CachedHttpSource over the fake registry with an in-memory cache."""
    return CachedHttpSource(client=mock_client, cache_store=memory_store, settings=settings)


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary cache directory."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture(autouse=True)
def _reset_rangefetch_logging():
    """Drop handlers installed by setup_logging() so tests stay isolated."""
    yield
    root = logging.getLogger("rangefetch")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
