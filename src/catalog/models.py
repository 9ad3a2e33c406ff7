# src/catalog/models.py
"""Catalog domain models: CatalogIndex, PageDescriptor, PageDocument.

The raw registration index is parsed once, here, into typed models. The
rest of the package never looks at untyped JSON nodes, except for page
documents, which are handed back to the caller verbatim.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from rangefetch.catalog.keys import range_cache_key
from rangefetch.errors import CatalogParseError, InvalidVersionError
from rangefetch.versioning.nuget_version import NuGetVersion
from rangefetch.versioning.range_parser import parse_version

PageDocument = dict[str, Any]


class PageDescriptor(BaseModel):
    """One entry of the index ``items`` array."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: str | None = None
    lower: NuGetVersion
    upper: NuGetVersion
    inline_page: PageDocument | None = None

    @model_validator(mode="after")
    def validate_page(self) -> PageDescriptor:
        if self.lower > self.upper:
            raise ValueError(f"lower {self.lower} is greater than upper {self.upper}")
        if self.inline_page is None and not self.id:
            raise ValueError("remote page has no '@id'")
        return self

    @property
    def is_inline(self) -> bool:
        return self.inline_page is not None

    def range_cache_key(self, package_id: str) -> str:
        return range_cache_key(package_id, self.lower, self.upper)

    @classmethod
    def from_item(cls, item: Any, location: str) -> PageDescriptor:
        """Build a descriptor from a raw index item.

        An item that carries its own ``items`` array is an inline page; the
        item itself is the page document.

        Raises:
            CatalogParseError: If the item is not a well-formed page entry.
        """
        if not isinstance(item, dict):
            raise CatalogParseError(location, "page entry is not an object")

        try:
            lower = parse_version(str(item["lower"]))
            upper = parse_version(str(item["upper"]))
        except KeyError as e:
            raise CatalogParseError(location, f"page entry is missing {e.args[0]!r}") from e
        except InvalidVersionError as e:
            raise CatalogParseError(location, str(e)) from e

        page_id = item.get("@id")
        try:
            return cls(
                id=str(page_id) if page_id is not None else None,
                lower=lower,
                upper=upper,
                inline_page=item if "items" in item else None,
            )
        except ValidationError as e:
            raise CatalogParseError(location, _first_error(e)) from e


class CatalogIndex(BaseModel):
    """Registration index of one package: its pages, in catalog order."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    package_id: str
    location: str
    pages: list[PageDescriptor]

    @classmethod
    def from_document(
        cls, document: Any, package_id: str, location: str
    ) -> CatalogIndex:
        """Parse a raw index document.

        Raises:
            CatalogParseError: If ``items`` is missing or malformed.
        """
        if not isinstance(document, dict):
            raise CatalogParseError(location, "index is not an object")
        items = document.get("items")
        if not isinstance(items, list):
            raise CatalogParseError(location, "index has no 'items' array")

        pages = [PageDescriptor.from_item(item, location) for item in items]
        return cls(package_id=package_id, location=location, pages=pages)


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    return details[0].get("msg", str(error))
