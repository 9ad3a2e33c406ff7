# src/logging/context.py
"""Contextual logging support: attach request_id, package_id, page to log records.

Context variables are copied into each asyncio task, so concurrent page
fetches each log their own ``page`` without interfering.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_package_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "package_id", default=None
)
_page: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "page", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    package_id: str | None = None
    page: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        package_id=_package_id.get(),
        page=_page.get(),
    )


def set_page_context(page: str | None) -> None:
    """Set page-level context (called inside each page fetch task)."""
    _page.set(page)


@contextmanager
def request_context(request_id: str, package_id: str) -> Iterator[None]:
    """Scope request-level context to a block, restoring the previous values."""
    request_token = _request_id.set(request_id)
    package_token = _package_id.set(package_id)
    try:
        yield
    finally:
        _package_id.reset(package_token)
        _request_id.reset(request_token)
