"""Registration catalog: index and range pages."""

from rangefetch.catalog.index_fetch import fetch_index
from rangefetch.catalog.models import CatalogIndex, PageDescriptor, PageDocument
from rangefetch.catalog.page_fetch import fetch_relevant_pages

__all__ = [
    "CatalogIndex",
    "PageDescriptor",
    "PageDocument",
    "fetch_index",
    "fetch_relevant_pages",
]
