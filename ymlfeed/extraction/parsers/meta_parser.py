"""
Meta Tag Parser

Reads product fields from page annotations: OpenGraph / Twitter card
meta tags, the document title, and schema.org microdata attributes.
Each method returns one candidate value (or empty string) so callers can
chain them in priority order.
"""

from bs4 import BeautifulSoup


class MetaTagParser:
    """
    Parses annotation-level product hints from HTML.

    Usage:
        parser = MetaTagParser(soup)
        name = parser.meta_property('og:title') or parser.document_title()
    """

    # Price annotations, in priority order
    PRICE_META_SELECTORS = [
        'meta[itemprop="price"]',
        'meta[property="product:price:amount"]',
        'meta[property="og:price:amount"]',
    ]

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def meta_property(self, prop: str) -> str:
        """Content of <meta property="..."> or empty string."""
        return self._content(self.soup.find('meta', attrs={'property': prop}))

    def meta_name(self, name: str) -> str:
        """Content of <meta name="..."> or empty string."""
        return self._content(self.soup.find('meta', attrs={'name': name}))

    def document_title(self) -> str:
        """Text of the <title> element."""
        title = self.soup.find('title')
        if title is None:
            return ""
        return title.get_text().strip()

    def meta_price(self) -> str:
        """First non-empty price meta annotation."""
        for selector in self.PRICE_META_SELECTORS:
            value = self._content(self.soup.select_one(selector))
            if value:
                return value
        return ""

    def microdata_price(self) -> str:
        """
        Price from the first [itemprop="price"] element.

        The content attribute wins over the element text.
        """
        element = self.soup.select_one('[itemprop="price"]')
        if element is None:
            return ""
        content = self._content(element)
        if content:
            return content
        return element.get_text().strip()

    def first_image_src(self) -> str:
        """src of the first <img> that has one."""
        img = self.soup.find('img', src=True)
        if img is None:
            return ""
        return (img.get('src') or "").strip()

    def _content(self, element) -> str:
        if element is None:
            return ""
        return (element.get('content') or "").strip()
