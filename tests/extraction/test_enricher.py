"""Tests for ymlfeed/extraction/enricher.py"""

import random
import threading
import time

import pytest

from ymlfeed.common.rows import TableRow
from ymlfeed.extraction.enricher import ProductEnricher, resolve_category_id
from ymlfeed.extraction.fetcher import FetchResponse

CATEGORIES = {"Shoes": "12", "Bags": "13"}


def product_page(name="", description="", price="", image=""):
    head = ""
    if name:
        head += f'<meta property="og:title" content="{name}">'
    if description:
        head += f'<meta name="description" content="{description}">'
    if price:
        head += f'<meta property="product:price:amount" content="{price}">'
    if image:
        head += f'<meta property="og:image" content="{image}">'
    return f"<html><head>{head}</head><body></body></html>"


class TestResolveCategoryId:
    def test_category_name_lookup(self):
        assert resolve_category_id(TableRow({"category": "Shoes"}), CATEGORIES) == "12"

    def test_category_name_trimmed(self):
        assert resolve_category_id(TableRow({"category": "  Bags "}), CATEGORIES) == "13"

    def test_unknown_category_name(self):
        assert resolve_category_id(TableRow({"category": "Hats"}), CATEGORIES) == "0"

    def test_name_lookup_is_case_sensitive(self):
        assert resolve_category_id(TableRow({"category": "shoes"}), CATEGORIES) == "0"

    def test_name_wins_over_categoryid(self):
        assert resolve_category_id(TableRow({"category": "Hats", "categoryid": "77"}), CATEGORIES) == "0"

    def test_categoryid_verbatim(self):
        assert resolve_category_id(TableRow({"categoryid": "77"}), CATEGORIES) == "77"

    def test_nothing(self):
        assert resolve_category_id(TableRow({"name": "x"}), CATEGORIES) == "0"


class TestEnrichRow:
    def test_scraped_values_win(self, make_fetcher):
        url = "https://shop.example/p/1"
        fetcher = make_fetcher({url: product_page("Scraped", "Scraped desc", "1 990,00", "https://cdn.shop.example/p1.jpg")})
        enricher = ProductEnricher(fetcher)
        row = TableRow({"url": url, "name": "Row", "description": "Row desc", "price": "500",
                        "picture": "https://shop.example/row.gif", "category": "Shoes"})

        offer = enricher.enrich_row(1, row, CATEGORIES, "RUB")

        assert offer.name == "Scraped"
        assert offer.description == "Scraped desc"
        assert offer.price == "1990.00"
        assert offer.picture == "https://cdn.shop.example/p1.jpg"
        assert offer.category_id == "12"
        assert offer.currency_id == "RUB"
        assert offer.url == url

    def test_zero_scraped_price_falls_back_to_row(self, make_fetcher):
        url = "https://shop.example/p/1"
        enricher = ProductEnricher(make_fetcher({url: product_page(price="0")}))
        offer = enricher.enrich_row(1, TableRow({"url": url, "price": "750 руб."}), CATEGORIES)
        assert offer.price == "750"

    def test_empty_scraped_fields_fall_back_to_row(self, make_fetcher):
        url = "https://shop.example/p/1"
        enricher = ProductEnricher(make_fetcher({url: "<html><body><p>nothing</p></body></html>"}))
        offer = enricher.enrich_row(1, TableRow({"url": url, "name": "Row", "description": "D"}), CATEGORIES)
        assert offer.name == "Row"
        assert offer.description == "D"
        assert offer.price == ""
        assert offer.picture == ""

    def test_empty_url_skips_fetch(self, make_fetcher):
        fetcher = make_fetcher()
        enricher = ProductEnricher(fetcher)
        row = TableRow({"url": "  ", "name": "Table Bag", "price": "2500,50", "picture": "https://x/bag.jpg"})

        offer = enricher.enrich_row(4, row, CATEGORIES)

        assert fetcher.calls == []
        assert offer.id == 4
        assert offer.url == ""
        assert offer.name == "Table Bag"
        assert offer.price == "2500.50"
        assert offer.picture == "https://x/bag.jpg"

    def test_unreachable_url_uses_table_values(self, make_fetcher):
        url = "https://down.example/p/9"
        fetcher = make_fetcher(failures=[url])
        enricher = ProductEnricher(fetcher, timeout=0.5)
        row = TableRow({"url": url, "name": "Row Name", "description": "Row desc",
                        "price": "1 234,50 ₽", "picture": "https://x/fallback.jpg"})

        offer = enricher.enrich_row(1, row, CATEGORIES)

        assert fetcher.calls == [(url, 0.5)]
        assert offer.name == "Row Name"
        assert offer.description == "Row desc"
        assert offer.price == "1234.50"
        assert offer.picture == "https://x/fallback.jpg"
        assert enricher.failed == 1

    def test_relative_scraped_image_resolved(self, make_fetcher):
        url = "https://shop.example/catalog/p1"
        enricher = ProductEnricher(make_fetcher({url: '<html><body><img src="/img/p1.jpg"></body></html>'}))
        offer = enricher.enrich_row(1, TableRow({"url": url}), CATEGORIES)
        assert offer.picture == "https://shop.example/img/p1.jpg"


class TestEnrich:
    def test_ids_dense_and_in_row_order(self, sample_rows, make_fetcher):
        fetcher = make_fetcher({"https://example-shop.ru/p/1": product_page("Scraped Shoe")})
        offers = ProductEnricher(fetcher, concurrency=2).enrich(sample_rows, CATEGORIES)

        assert [o.id for o in offers] == [1, 2, 3]
        assert [o.name for o in offers] == ["Scraped Shoe", "Table Bag", "Unknown Cat"]
        assert [o.category_id for o in offers] == ["12", "13", "0"]

    def test_empty_rows(self, make_fetcher):
        assert ProductEnricher(make_fetcher()).enrich([], CATEGORIES) == []

    def test_concurrency_floor(self, make_fetcher):
        assert ProductEnricher(make_fetcher(), concurrency=0).concurrency == 1
        assert ProductEnricher(make_fetcher(), concurrency=-3).concurrency == 1

    def test_order_independent_of_completion_order(self):
        class ShuffledFetcher:
            def get(self, url, timeout):
                time.sleep(random.uniform(0, 0.02))
                return FetchResponse(200, product_page(name=url.rsplit("/", 1)[-1]))

        rows = [TableRow({"url": f"https://x/p/item{i}"}) for i in range(40)]
        offers = ProductEnricher(ShuffledFetcher(), concurrency=8).enrich(rows, {})

        assert [o.id for o in offers] == list(range(1, 41))
        assert [o.name for o in offers] == [f"item{i}" for i in range(40)]

    @pytest.mark.parametrize("concurrency", [1, 3])
    def test_in_flight_bounded(self, concurrency):
        lock = threading.Lock()
        state = {"active": 0, "peak": 0}

        class CountingFetcher:
            def get(self, url, timeout):
                with lock:
                    state["active"] += 1
                    state["peak"] = max(state["peak"], state["active"])
                time.sleep(0.01)
                with lock:
                    state["active"] -= 1
                return FetchResponse(200, "<html></html>")

        rows = [TableRow({"url": f"https://x/p/{i}"}) for i in range(12)]
        ProductEnricher(CountingFetcher(), concurrency=concurrency).enrich(rows, {})

        assert 1 <= state["peak"] <= concurrency

    def test_failures_do_not_drop_rows(self, make_fetcher):
        rows = [TableRow({"url": f"https://x/p/{i}", "name": f"Row {i}"}) for i in range(5)]
        offers = ProductEnricher(make_fetcher(), concurrency=3).enrich(rows, {})
        assert [o.name for o in offers] == [f"Row {i}" for i in range(5)]

    def test_counters_cover_each_call(self, make_fetcher):
        fetcher = make_fetcher({"https://x/p/ok": "<html></html>"}, failures=["https://x/p/down"])
        enricher = ProductEnricher(fetcher, concurrency=2)

        enricher.enrich([TableRow({"url": "https://x/p/ok"}), TableRow({"url": "https://x/p/down"})], {})
        assert (enricher.fetched, enricher.failed) == (1, 1)

        enricher.enrich([TableRow({"url": "https://x/p/ok"})], {})
        assert (enricher.fetched, enricher.failed) == (1, 0)

        enricher.enrich([], {})
        assert (enricher.fetched, enricher.failed) == (0, 0)
