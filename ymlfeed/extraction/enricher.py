"""
Product Enricher

Turns product table rows into Offers: fetches each row's page with bounded
concurrency, extracts what it can, and resolves every field against the
row's own values.

Field precedence:
- name / description: scraped if non-empty, else the row's
- price: scraped if non-empty and non-zero, else the row's (both normalized)
- picture: ImageSelector over scraped candidates with the row's picture as fallback
- categoryId: row "category" looked up by name, else row "categoryid", else "0"
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import List, Mapping, Sequence, Tuple

from ..common.constants import DEFAULT_CURRENCY_ID, UNKNOWN_CATEGORY_ID
from ..common.errors import FetchError
from ..common.rows import TableRow
from ..models import Offer, ScrapedData
from .html_extractor import HtmlExtractor
from .image_selector import ImageSelector
from .price import is_usable_price, normalize_price

logger = logging.getLogger(__name__)


def resolve_category_id(row: TableRow, category_by_name: Mapping[str, str]) -> str:
    """
    Resolve a row's category id.

    A category name (trimmed, exact match) takes priority over an explicit
    categoryid column. Unknown names resolve to "0".
    """
    name = row.get_trimmed_string("category")
    if name:
        return category_by_name.get(name, UNKNOWN_CATEGORY_ID)

    category_id = row.get_optional_id("categoryid")
    if category_id is not None:
        return category_id

    return UNKNOWN_CATEGORY_ID


class ProductEnricher:
    """
    Enriches product rows with scraped page data.

    At most `concurrency` fetches are in flight at once; output order always
    matches input order.

    Usage:
        enricher = ProductEnricher(fetcher, concurrency=5, timeout=12.0)
        offers = enricher.enrich(rows, {"Shoes": "12"}, currency_id="RUB")
    """

    def __init__(
        self,
        fetcher,
        concurrency: int = 5,
        timeout: float = 12.0,
        extractor: HtmlExtractor | None = None,
        selector: ImageSelector | None = None,
    ):
        """
        Initialize the enricher.

        Args:
            fetcher: Object with get(url, timeout) -> FetchResponse
            concurrency: Maximum parallel fetches (values below 1 mean 1)
            timeout: Per-fetch timeout in seconds
            extractor: HTML extractor (default HtmlExtractor())
            selector: Image selector (default ImageSelector())
        """
        self.fetcher = fetcher
        self.concurrency = max(1, int(concurrency or 1))
        self.timeout = timeout
        self.extractor = extractor or HtmlExtractor()
        self.selector = selector or ImageSelector()

        self.fetched = 0
        self.failed = 0
        self._stats_lock = Lock()

    def enrich(
        self,
        rows: Sequence[TableRow],
        category_by_name: Mapping[str, str],
        currency_id: str = DEFAULT_CURRENCY_ID,
    ) -> List[Offer]:
        """
        Enrich all rows. The fetched/failed counters cover this call only.

        Args:
            rows: Product rows in table order
            category_by_name: Trimmed category name -> id
            currency_id: Currency stamped on every offer

        Returns:
            One Offer per row, ids 1..N in row order
        """
        with self._stats_lock:
            self.fetched = 0
            self.failed = 0

        if not rows:
            return []

        tasks: List[Tuple[int, TableRow]] = list(enumerate(rows, 1))
        logger.info("Enriching %d products (concurrency=%d)", len(tasks), self.concurrency)

        with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
            offers = list(executor.map(
                lambda task: self.enrich_row(task[0], task[1], category_by_name, currency_id),
                tasks,
            ))

        logger.info("Enriched %d products (%d fetched, %d fetch failures)",
                    len(offers), self.fetched, self.failed)
        return offers

    def enrich_row(
        self,
        offer_id: int,
        row: TableRow,
        category_by_name: Mapping[str, str],
        currency_id: str = DEFAULT_CURRENCY_ID,
    ) -> Offer:
        """Build one Offer from a row and its scraped page."""
        url = row.get_trimmed_string("url")
        scraped = self.scrape(url)

        scraped_price = normalize_price(scraped.price)
        price = scraped_price if is_usable_price(scraped_price) else normalize_price(row.get_trimmed_string("price"))

        return Offer(
            id=offer_id,
            url=url,
            name=scraped.name or row.get_trimmed_string("name"),
            description=scraped.description or row.get_trimmed_string("description"),
            category_id=resolve_category_id(row, category_by_name),
            price=price,
            currency_id=currency_id or DEFAULT_CURRENCY_ID,
            picture=self.selector.select_main(scraped.pictures, row.get_trimmed_string("picture")),
        )

    def scrape(self, url: str) -> ScrapedData:
        """
        Fetch and extract one page.

        An empty URL or a failed fetch yields an empty ScrapedData.
        """
        if not url:
            return ScrapedData()

        try:
            response = self.fetcher.get(url, self.timeout)
        except FetchError as e:
            with self._stats_lock:
                self.failed += 1
            logger.warning("Scrape skipped, using table values: %s", e)
            return ScrapedData()

        with self._stats_lock:
            self.fetched += 1
        return self.extractor.extract(response.body, base_url=url)
