"""Tests for ymlfeed/extraction/price.py"""

import pytest

from ymlfeed.extraction.price import is_positive_price, is_usable_price, normalize_price


class TestNormalizePrice:
    @pytest.mark.parametrize("raw, expected", [
        ("1 234,50 ₽", "1234.50"),
        ("", ""),
        ("abc", ""),
        (None, ""),
        ("$19.99", "19.99"),
        ("4 990", "4990"),
        ("от 1500 руб.", "1500"),
        ("12.", "12"),
        (1290, "1290"),
        (0, ""),
        ("0", "0"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_price(raw) == expected

    def test_first_token_only(self):
        assert normalize_price("990 / 1290") == "990"


class TestPriceChecks:
    def test_usable(self):
        assert is_usable_price("10")
        assert not is_usable_price("0")
        assert not is_usable_price("")

    def test_positive(self):
        assert is_positive_price("0.01")
        assert not is_positive_price("0")
        assert not is_positive_price("0.00")
        assert not is_positive_price("")
        assert not is_positive_price(None)
        assert not is_positive_price("-5")
