"""Shared test fixtures."""

from pathlib import Path

import pytest

from ymlfeed.common.config_loader import FeedConfig
from ymlfeed.common.errors import FetchError
from ymlfeed.common.rows import TableRow
from ymlfeed.extraction.fetcher import FetchResponse
from ymlfeed.models import Category, ShopSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeFetcher:
    """
    In-memory fetcher: maps URL -> HTML body.

    URLs listed in `failures` (or not mapped at all) raise FetchError.
    """

    def __init__(self, pages=None, failures=None):
        self.pages = dict(pages or {})
        self.failures = set(failures or [])
        self.calls = []

    def get(self, url, timeout):
        self.calls.append((url, timeout))
        if url in self.failures or url not in self.pages:
            raise FetchError(url, "Timeout: read timed out")
        return FetchResponse(status=200, body=self.pages[url])


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def product_page_html():
    """Load the product page HTML fixture."""
    return (FIXTURES_DIR / "product_page.html").read_text(encoding="utf-8")


@pytest.fixture
def jsonld_only_html():
    """Load the JSON-LD-only page fixture."""
    return (FIXTURES_DIR / "jsonld_only_page.html").read_text(encoding="utf-8")


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def shop_settings():
    return ShopSettings(name="Example Shop", company="Example LLC", url="https://example-shop.ru")


@pytest.fixture
def sample_categories():
    return [
        Category(id="12", name="Shoes"),
        Category(id="13", name="Bags"),
    ]


@pytest.fixture
def sample_rows():
    """Product rows with a mix of URLs and table-only values."""
    return [
        TableRow({"URL": "https://example-shop.ru/p/1", "Name": "Row Shoe", "Price": "1 000", "Category": "Shoes"}),
        TableRow({"url": "", "name": "Table Bag", "price": "2500,50", "categoryid": "13",
                  "picture": "https://example-shop.ru/img/bag.jpg"}),
        TableRow({"url": "https://example-shop.ru/p/3", "name": "Unknown Cat", "category": "Hats"}),
    ]


def write_workbook(root: Path, source_id: str, settings=None, categories=None, products=None) -> Path:
    """Write a CSV workbook directory for one source."""
    source_dir = root / source_id
    source_dir.mkdir(parents=True, exist_ok=True)
    if settings is not None:
        lines = ["key,value"] + [f"{k},{v}" for k, v in settings.items()]
        (source_dir / "settings.csv").write_text("\n".join(lines) + "\n", encoding="utf-8")
    if categories is not None:
        (source_dir / "categories.csv").write_text("\n".join(categories) + "\n", encoding="utf-8")
    if products is not None:
        (source_dir / "products.csv").write_text("\n".join(products) + "\n", encoding="utf-8")
    return source_dir


@pytest.fixture
def workbook_root(tmp_path):
    """Two-source workbook directory."""
    root = tmp_path / "sources"
    write_workbook(
        root, "shop-a",
        settings={"name": "Shop A", "company": "A LLC", "url": "https://a.example"},
        categories=["id,name", "12,Shoes", "13, Bags "],
        products=[
            "url,name,price,category,picture",
            "https://a.example/p/1,Shoe One,1000,Shoes,https://a.example/img/1.jpg",
            ",Bag Two,\"2 500,50\",Bags,",
        ],
    )
    write_workbook(
        root, "shop-b",
        settings={"name": "Shop B", "company": "B LLC", "url": "https://b.example", "currencyId": "USD"},
        categories=["id,name", "1,Hats"],
        products=["url,name,price,categoryid", ",Cap,15,1"],
    )
    return root


@pytest.fixture
def feed_config(tmp_path, workbook_root):
    return FeedConfig(
        output_dir=str(tmp_path / "feeds"),
        errors_dir=str(tmp_path / "errors"),
        sources_dir=str(workbook_root),
        concurrency=3,
        timeout_ms=500,
    )


@pytest.fixture
def make_workbook():
    """Factory fixture wrapping write_workbook."""
    return write_workbook


@pytest.fixture
def make_fetcher():
    """Factory fixture for FakeFetcher(pages, failures)."""
    return FakeFetcher
