# src/errors.py
"""Error taxonomy for selective catalog page retrieval.

Only ``ResourceNotFoundError`` is recovered locally (empty index, dropped
page). Everything else propagates to the caller and aborts the whole fetch.
"""

from __future__ import annotations


class RangeFetchError(Exception):
    """Base class for all rangefetch errors."""


class InvalidRangeFormatError(RangeFetchError, ValueError):
    """Raised when a version-range expression cannot be parsed."""

    def __init__(self, expression: str, reason: str) -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid version range {expression!r}: {reason}")


class InvalidVersionError(RangeFetchError, ValueError):
    """Raised when a single version string cannot be parsed."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid version: {text!r}")


class ResourceNotFoundError(RangeFetchError):
    """Remote resource does not exist (HTTP 404)."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Resource not found: {location}")


class TransportError(RangeFetchError):
    """Network failure or unexpected HTTP status."""

    def __init__(
        self, location: str, message: str, status_code: int | None = None
    ) -> None:
        self.location = location
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Failed to fetch {location}{detail}: {message}")


class CatalogParseError(RangeFetchError):
    """Catalog document does not have the expected shape."""

    def __init__(self, location: str, message: str) -> None:
        self.location = location
        super().__init__(f"Malformed catalog document at {location}: {message}")


class FetchCancelledError(RangeFetchError):
    """Cancellation was requested while a fetch was in flight."""

    def __init__(self, location: str | None = None) -> None:
        self.location = location
        where = f" ({location})" if location else ""
        super().__init__(f"Fetch cancelled{where}")
