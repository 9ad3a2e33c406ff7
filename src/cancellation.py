# src/cancellation.py
"""Cooperative cancellation token shared by every fetch of one request.

A token is observed at each suspension point. Cancelling it makes in-flight
and not-yet-started fetches raise ``FetchCancelledError`` promptly, which
callers can tell apart from transport or parse failures.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from rangefetch.errors import FetchCancelledError

T = TypeVar("T")


class CancellationToken:
    """Cancellation signal backed by an ``asyncio.Event``."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    async def wait(self) -> None:
        """Suspend until cancellation is requested."""
        await self._event.wait()

    def raise_if_cancelled(self, location: str | None = None) -> None:
        if self._event.is_set():
            raise FetchCancelledError(location)

    async def run(self, awaitable: Awaitable[T], location: str | None = None) -> T:
        """Await ``awaitable`` unless the token fires first.

        Raises:
            FetchCancelledError: If cancellation wins the race. The pending
                work is cancelled before the error is raised.
        """
        work = asyncio.ensure_future(awaitable)
        if self._event.is_set():
            work.cancel()
            raise FetchCancelledError(location)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {work, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            waiter.cancel()

        if work in done:
            return work.result()

        work.cancel()
        try:
            await work
        except asyncio.CancelledError:
            # Our own task may have been cancelled while waiting for cleanup.
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        except Exception as e:
            raise FetchCancelledError(location) from e
        raise FetchCancelledError(location)
