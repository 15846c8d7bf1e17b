"""
Structured Data Parser

Extracts product information from JSON-LD structured data (schema.org).
Every record on the page is considered, in document order; the caller
decides which record wins for each field.
"""

import json
import logging
from typing import Any, Dict, List

from bs4 import BeautifulSoup

from ...common.errors import ExtractionError

logger = logging.getLogger(__name__)


class StructuredDataParser:
    """
    Parses JSON-LD structured data from HTML pages.

    JSON-LD is embedded in <script type="application/ld+json"> tags and
    contains schema.org structured data for products.

    Usage:
        parser = StructuredDataParser()
        records = parser.parse_all(soup)
        price = parser.extract_price(records[0])
    """

    def parse_all(self, soup: BeautifulSoup) -> List[Dict[str, Any]]:
        """
        Extract every JSON-LD record from the page.

        A script holding a list contributes each element; an object with
        an "@graph" contributes the graph nodes. Scripts with invalid JSON
        are skipped.

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            List of record dicts in document order
        """
        records = []
        for script in soup.find_all('script', type='application/ld+json'):
            try:
                records.extend(self.parse_script(script.string or ""))
            except ExtractionError as e:
                logger.debug("Skipping JSON-LD block: %s", e)
        return records

    def parse_script(self, text: str) -> List[Dict[str, Any]]:
        """
        Parse one JSON-LD script body into records.

        Raises:
            ExtractionError: If the body is not valid JSON
        """
        if not text or not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Invalid JSON-LD: {e}")

        nodes = data if isinstance(data, list) else [data]
        records = []
        for node in nodes:
            if not isinstance(node, dict):
                continue
            graph = node.get('@graph')
            if isinstance(graph, list):
                records.extend(item for item in graph if isinstance(item, dict))
            else:
                records.append(node)
        return records

    def extract_name(self, data: Dict[str, Any]) -> str:
        """Extract the record name or empty string."""
        return self._text(data.get('name')) if data else ""

    def extract_description(self, data: Dict[str, Any]) -> str:
        """Extract the record description or empty string."""
        return self._text(data.get('description')) if data else ""

    def extract_price(self, data: Dict[str, Any]) -> str:
        """
        Extract the offer price from a record.

        Args:
            data: One JSON-LD record

        Returns:
            Raw price as string (e.g., "7.71") or empty string
        """
        if not data:
            return ""

        offers = data.get('offers')
        if isinstance(offers, list):
            offers = offers[0] if offers else None
        if not isinstance(offers, dict):
            return ""

        price = offers.get('price')
        if price is None or price == "":
            return ""
        return str(price)

    def _text(self, value: Any) -> str:
        """Text fields may be strings or numbers; anything else is ignored."""
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value).strip()
        return ""
