"""Cache-mediated HTTP transport."""

from rangefetch.transport.http_source import CachedHttpSource, parse_json_document
from rangefetch.transport.models import CachedRequest

__all__ = ["CachedHttpSource", "CachedRequest", "parse_json_document"]
