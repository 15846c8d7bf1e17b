"""
YML Catalog Builder

Renders shop settings, categories and offers into a YML (Yandex Market
Language) XML document with a fixed element and attribute order.

Document layout:
    yml_catalog[@date]
      shop
        name, company, url
        currencies/currency[@id, @rate=1]
        categories/category[@id] (text = name)
        offers/offer[@id, @available=true]
          name, url, price?, currencyId, categoryId, picture?, description
"""

import logging
import re
import xml.etree.ElementTree as ET
from datetime import date
from typing import Any, Callable, List, Sequence, Tuple

from ..common.constants import (
    DEFAULT_CURRENCY_ID,
    FEED_FILENAME_EXTENSION,
    FEED_FILENAME_PREFIX,
    UNKNOWN_CATEGORY_ID,
)
from ..extraction.price import is_positive_price
from ..models import Catalog, Category, Offer, ShopSettings

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS_RE = re.compile(r'[^A-Za-z0-9_-]')

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL_CHARS_RE = re.compile(
    '[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]'
)


def _text(value: Any) -> str:
    """Plain text coercion; None becomes an empty string."""
    return "" if value is None else str(value)


def _xml_text(value: Any) -> str:
    """Text safe for an XML 1.0 document; illegal characters are dropped."""
    return _XML_ILLEGAL_CHARS_RE.sub('', _text(value))


def build_filename(source_id: str, display_name: str = "", settings_name: str = "") -> str:
    """
    Compute the feed filename for a source.

    The base is the first non-blank of the display name, the shop name and
    "spreadsheet_<id>". Every character outside [A-Za-z0-9_-] becomes "_".
    Sources sharing a sanitized name produce the same filename.

    Args:
        source_id: Source identifier
        display_name: Human-readable source name (may be empty)
        settings_name: Shop name from the settings table (may be empty)

    Returns:
        Filename such as "Feed_My_Shop.xml"
    """
    base = ""
    for candidate in (display_name, settings_name, f"spreadsheet_{source_id}"):
        candidate = _text(candidate).strip()
        if candidate:
            base = candidate
            break

    safe = _UNSAFE_FILENAME_CHARS_RE.sub('_', base)
    return f"{FEED_FILENAME_PREFIX}{safe}{FEED_FILENAME_EXTENSION}"


class YmlCatalogBuilder:
    """
    Builds YML catalog documents.

    Usage:
        builder = YmlCatalogBuilder()
        content, filename = builder.render(settings, categories, offers, source_id="shop-a")
    """

    def __init__(self, clock: Callable[[], date] = date.today, indent: str = "  "):
        """
        Initialize the builder.

        Args:
            clock: Returns the generation date stamped on the catalog
            indent: Pretty-print indentation ("" disables pretty printing)
        """
        self.clock = clock
        self.indent = indent

    def render(
        self,
        settings: ShopSettings,
        categories: Sequence[Category],
        offers: Sequence[Offer],
        source_id: str = "",
        display_name: str = "",
    ) -> Tuple[bytes, str]:
        """
        Render a catalog document and its filename.

        Args:
            settings: Shop settings
            categories: Categories in table order
            offers: Offers in row order
            source_id: Source identifier (filename fallback)
            display_name: Source display name (preferred filename base)

        Returns:
            (UTF-8 XML bytes, filename)
        """
        catalog = Catalog(
            settings=settings,
            categories=list(categories),
            offers=list(offers),
            generated_on=self.clock(),
        )
        content = self.to_bytes(catalog)
        filename = build_filename(source_id, display_name, settings.name)
        logger.debug("Rendered %s: %d categories, %d offers", filename,
                     len(catalog.categories), len(catalog.offers))
        return content, filename

    def to_bytes(self, catalog: Catalog) -> bytes:
        """Serialize a Catalog to UTF-8 XML bytes with a declaration."""
        root = self.build_tree(catalog)
        if self.indent:
            ET.indent(root, space=self.indent)
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)

    def build_tree(self, catalog: Catalog) -> ET.Element:
        """Build the element tree for a Catalog."""
        settings = catalog.settings
        currency_id = settings.currency_id or DEFAULT_CURRENCY_ID

        root = ET.Element("yml_catalog", {"date": catalog.generated_on.isoformat()})
        shop = ET.SubElement(root, "shop")

        self._add_text(shop, "name", settings.name)
        self._add_text(shop, "company", settings.company)
        self._add_text(shop, "url", settings.url)

        currencies = ET.SubElement(shop, "currencies")
        ET.SubElement(currencies, "currency", {"id": _xml_text(currency_id), "rate": "1"})

        categories = ET.SubElement(shop, "categories")
        for category in catalog.categories:
            node = ET.SubElement(categories, "category", {"id": _xml_text(category.id)})
            node.text = _xml_text(category.name)

        offers = ET.SubElement(shop, "offers")
        for offer in catalog.offers:
            self._add_offer(offers, offer, currency_id)

        return root

    def _add_offer(self, parent: ET.Element, offer: Offer, currency_id: str) -> ET.Element:
        node = ET.SubElement(parent, "offer", {"id": str(offer.id), "available": "true"})
        self._add_text(node, "name", offer.name)
        self._add_text(node, "url", offer.url)
        if is_positive_price(offer.price):
            self._add_text(node, "price", offer.price)
        self._add_text(node, "currencyId", offer.currency_id or currency_id)
        self._add_text(node, "categoryId", offer.category_id or UNKNOWN_CATEGORY_ID)
        if offer.picture:
            self._add_text(node, "picture", offer.picture)
        self._add_text(node, "description", offer.description)
        return node

    @staticmethod
    def _add_text(parent: ET.Element, tag: str, value: Any) -> ET.Element:
        node = ET.SubElement(parent, tag)
        node.text = _xml_text(value)
        return node


def parse_offers(content: bytes) -> List[dict]:
    """
    Read offers back from a rendered document.

    Returns:
        One dict per offer: attributes plus child element texts
    """
    root = ET.fromstring(content)
    offers = []
    for node in root.iterfind("./shop/offers/offer"):
        record = dict(node.attrib)
        for child in node:
            record[child.tag] = child.text or ""
        offers.append(record)
    return offers
