"""
HTML Extractor

Produces a best-effort ScrapedData from raw product page markup.

Each field is resolved by an ordered chain of attempts:
    name:        og:title -> <title> -> JSON-LD name
    description: meta description -> og:description -> JSON-LD description
    price:       price meta tags -> [itemprop=price] -> JSON-LD offers.price
    images:      og:image -> twitter:image -> first <img src>

A failing attempt yields no value and the chain moves on; extraction as a
whole never raises on malformed markup.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..models import ScrapedData
from ..common.fallback import RECOVERABLE_ERRORS, first_non_empty
from .parsers import MetaTagParser, StructuredDataParser
from .price import normalize_price

logger = logging.getLogger(__name__)


class HtmlExtractor:
    """
    Extracts name, description, price and image candidates from HTML.

    Usage:
        extractor = HtmlExtractor()
        data = extractor.extract(html, base_url="https://shop.example/p/1")
    """

    def __init__(self, parser: str = "lxml"):
        self.parser = parser
        self.structured = StructuredDataParser()

    def extract(self, html: str, base_url: str = "") -> ScrapedData:
        """
        Extract product fields from markup.

        Args:
            html: Raw page markup
            base_url: Page URL, used to resolve a relative image src

        Returns:
            ScrapedData (fields empty where nothing was found)
        """
        if not html or not str(html).strip():
            return ScrapedData()

        try:
            soup = BeautifulSoup(html, self.parser)
        except RECOVERABLE_ERRORS as e:
            logger.debug("Unparseable markup: %s", e)
            return ScrapedData()

        meta = MetaTagParser(soup)
        records = self._structured_records(soup)

        name = first_non_empty([
            partial(meta.meta_property, 'og:title'),
            meta.document_title,
            *self._record_attempts(self.structured.extract_name, records),
        ])
        description = first_non_empty([
            partial(meta.meta_name, 'description'),
            partial(meta.meta_property, 'og:description'),
            *self._record_attempts(self.structured.extract_description, records),
        ])
        price = first_non_empty([
            meta.meta_price,
            meta.microdata_price,
            *self._record_attempts(self.structured.extract_price, records),
        ])
        image = first_non_empty([
            partial(meta.meta_property, 'og:image'),
            partial(meta.meta_name, 'twitter:image'),
            meta.first_image_src,
        ])

        if image and base_url:
            image = urljoin(base_url, image)

        return ScrapedData(
            name=name,
            description=description,
            price=normalize_price(price),
            pictures=[image] if image else [],
        )

    def _structured_records(self, soup: BeautifulSoup) -> List[Dict[str, Any]]:
        try:
            return self.structured.parse_all(soup)
        except RECOVERABLE_ERRORS as e:
            logger.debug("JSON-LD scan failed: %s", e)
            return []

    @staticmethod
    def _record_attempts(getter, records: List[Dict[str, Any]]) -> list:
        """One attempt per JSON-LD record, in document order."""
        return [partial(getter, record) for record in records]


def extract(html: str, base_url: str = "") -> ScrapedData:
    """Module-level shortcut for HtmlExtractor().extract()."""
    return HtmlExtractor().extract(html, base_url)
