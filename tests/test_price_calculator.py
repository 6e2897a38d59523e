"""
Tests for processing/price_calculator.py

Covers: discount projection and rounding, price formatting with grouped
thousands and comma decimals, and the URL prefix check used before
rendering images and links.
"""

import pytest

from processing.price_calculator import (
    THOUSANDS_SEPARATOR,
    apply_discount,
    format_price,
    is_displayable_url,
)


# ═══════════════════════════════════════════════════════════════════════════
# Discount projection
# ═══════════════════════════════════════════════════════════════════════════

class TestApplyDiscount:
    def test_ten_percent(self):
        assert apply_discount(1000, 10) == 900

    def test_zero_percent_unchanged(self):
        assert apply_discount(1000, 0) == 1000

    def test_negative_percent_unchanged(self):
        assert apply_discount(1234.56, -5) == 1234.56

    def test_rounds_to_whole_units(self):
        assert apply_discount(999, 15) == 849  # 849.15

    def test_half_rounds_up(self):
        assert apply_discount(5, 50) == 3  # 2.5

    def test_not_clamped(self):
        assert apply_discount(100, 150) == -50

    def test_zero_price(self):
        assert apply_discount(0, 20) == 0


# ═══════════════════════════════════════════════════════════════════════════
# Formatting
# ═══════════════════════════════════════════════════════════════════════════

class TestFormatPrice:
    def test_grouping(self):
        assert format_price(1234567) == f"1{THOUSANDS_SEPARATOR}234{THOUSANDS_SEPARATOR}567"

    def test_small_number(self):
        assert format_price(990) == "990"

    def test_comma_decimal_trailing_zero_dropped(self):
        assert format_price(1234.5) == f"1{THOUSANDS_SEPARATOR}234,5"

    def test_two_decimals(self):
        assert format_price(12.75) == "12,75"

    def test_whole_float(self):
        assert format_price(900.0) == "900"

    def test_zero(self):
        assert format_price(0) == "0"

    def test_negative(self):
        assert format_price(-1500) == f"-1{THOUSANDS_SEPARATOR}500"


# ═══════════════════════════════════════════════════════════════════════════
# URL check
# ═══════════════════════════════════════════════════════════════════════════

class TestIsDisplayableUrl:
    @pytest.mark.parametrize("url", [
        "https://img.example/a.jpg",
        "http://shop.example/p",
        "  HTTPS://Example.com ",
    ])
    def test_valid(self, url):
        assert is_displayable_url(url) is True

    @pytest.mark.parametrize("url", ["", None, "img/a.jpg", "ftp://x", "www.example.com", "-"])
    def test_invalid(self, url):
        assert is_displayable_url(url) is False
