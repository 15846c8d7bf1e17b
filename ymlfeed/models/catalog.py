"""
Catalog data models.

Pure data classes for the feed build pipeline.
No business logic beyond construction-time validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Mapping

from ..common.constants import DEFAULT_CURRENCY_ID, UNKNOWN_CATEGORY_ID
from ..common.errors import MissingRequiredFieldError
from ..common.rows import TableRow

REQUIRED_SETTINGS = ("name", "company", "url")


@dataclass(frozen=True)
class ShopSettings:
    """Shop-level settings read from the settings table."""
    name: str
    company: str
    url: str
    currency_id: str = DEFAULT_CURRENCY_ID

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any], source_id: str = "") -> "ShopSettings":
        """
        Build settings from a key/value mapping (keys lower-cased).

        Raises:
            MissingRequiredFieldError: If name, company or url is blank
        """
        row = TableRow(settings)
        for key in REQUIRED_SETTINGS:
            if not row.get_trimmed_string(key):
                raise MissingRequiredFieldError(key, source_id)

        return cls(
            name=row.get_trimmed_string("name"),
            company=row.get_trimmed_string("company"),
            url=row.get_trimmed_string("url"),
            currency_id=row.get_trimmed_string("currencyid") or DEFAULT_CURRENCY_ID,
        )


@dataclass(frozen=True)
class Category:
    """Flat category entry."""
    id: str
    name: str


@dataclass
class ScrapedData:
    """Best-effort data extracted from one product page."""
    name: str = ""
    description: str = ""
    price: str = ""
    pictures: List[str] = field(default_factory=list)


@dataclass
class Offer:
    """
    One resolved product record ready for serialization.

    `id` is the 1-based row position in the product table.
    """
    id: int
    url: str = ""
    name: str = ""
    description: str = ""
    category_id: str = UNKNOWN_CATEGORY_ID
    price: str = ""
    currency_id: str = DEFAULT_CURRENCY_ID
    picture: str = ""


@dataclass
class Catalog:
    """Root output artifact: one per source per build."""
    settings: ShopSettings
    categories: List[Category] = field(default_factory=list)
    offers: List[Offer] = field(default_factory=list)
    generated_on: date = field(default_factory=date.today)


@dataclass
class SourceTables:
    """Everything read from one tabular source."""
    settings: ShopSettings
    categories: List[Category] = field(default_factory=list)
    products: List[TableRow] = field(default_factory=list)

    @property
    def category_by_name(self) -> dict:
        """Map trimmed category name to id; later duplicates win."""
        return {category.name: category.id for category in self.categories}


@dataclass(frozen=True)
class SourceRef:
    """A discoverable source."""
    id: str
    display_name: str = ""


@dataclass(frozen=True)
class BuildResult:
    """One written feed."""
    source_id: str
    filename: str
    url: str


def categories_from_rows(rows: List[TableRow]) -> List[Category]:
    """
    Keep category rows that have both an id and a name.

    Duplicate ids are passed through unchanged.
    """
    categories = []
    for row in rows:
        category_id = row.get_trimmed_string("id")
        name = row.get_trimmed_string("name")
        if category_id and name:
            categories.append(Category(id=category_id, name=name))
    return categories
