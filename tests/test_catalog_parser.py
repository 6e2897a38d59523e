"""
Tests for processing/catalog_parser.py

Covers both feed shapes end to end:
  - Segment-coded feed (one header line, category column)
  - Sectioned feed (two header lines, category from section rows)
Plus line endings, blank/malformed lines, empty input, idempotence, and the
catalog-wide invariants every parsed item must satisfy.
"""

import pytest

from config.feed_layout import SECTIONED_LAYOUT, SEGMENT_LAYOUT
from config.normalization_rules import DEFAULT_CATEGORY
from processing.catalog_parser import CatalogParseResult, parse_catalog, parse_feed


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SEGMENT_FEED = "\n".join([
    "list,article,name,НОВИНКА,ДИСТРИБЬЮТОР,pack,pallet,РРЦ,АКЦ,,,,image_url,product_url",
    'byt,A-1,"Фильтр ""Аквафор"", кувшин",Да,,1,48,"1 290,00","990,00",,,,https://img/a1.jpg,https://shop/a1',
    "byt,A-2,Картридж,,+,10,400,350,,,,,,",
    "",
    "prom,B-1,Насос промышленный,,1,1,4,125000,0,,,,,",
    ",,,,,,,,,,,,,",
    "xyz,C-1,,,,,,50,,,,,,",
    "x,y",
])

SECTIONED_FEED = "\r\n".join([
    "Прайс-лист на 01.10",
    "Артикул,Наименование,Описание,Цена,Акция",
    ",Pumps,",
    'P-1,Pump A,"Quiet, 220V",100,',
    "P-2,Pump B,,200,150",
    ",Filters,",
    "F-1,Filter X,,30,",
])


# ═══════════════════════════════════════════════════════════════════════════
# Segment-coded feed
# ═══════════════════════════════════════════════════════════════════════════

class TestSegmentFeed:
    def test_item_count(self):
        result = parse_feed(SEGMENT_FEED, SEGMENT_LAYOUT)
        assert isinstance(result, CatalogParseResult)
        # A-1, A-2, B-1, C-1; the blank and the 2-cell line are skipped
        assert [item.article for item in result.items] == ["A-1", "A-2", "B-1", "C-1"]

    def test_quoted_name_with_comma_and_quotes(self):
        item = parse_catalog(SEGMENT_FEED)[0]
        assert item.name == 'Фильтр "Аквафор", кувшин'
        assert item.price == 1290.0
        assert item.promo_price == 990.0
        assert item.is_new is True
        assert item.image_url == "https://img/a1.jpg"

    def test_categories(self):
        items = parse_catalog(SEGMENT_FEED)
        assert [item.category for item in items] == [
            "Бытовой сегмент",
            "Бытовой сегмент",
            "Промышленный сегмент",
            DEFAULT_CATEGORY,
        ]

    def test_zero_promo_absent(self):
        pump = parse_catalog(SEGMENT_FEED)[2]
        assert pump.promo_price is None
        assert pump.is_distributor is True

    def test_ids_use_line_index(self):
        ids = [item.id for item in parse_catalog(SEGMENT_FEED)]
        assert ids == ["item-1-A-1", "item-2-A-2", "item-4-B-1", "item-6-C-1"]

    def test_skipped_rows_recorded(self):
        result = parse_feed(SEGMENT_FEED, SEGMENT_LAYOUT)
        skipped = {entry["line"]: entry["reason"] for entry in result.skipped_rows}
        assert "blank row" in skipped[5]
        assert "too few cells" in skipped[7]
        # Truly empty lines are not reported
        assert 3 not in skipped

    def test_total_lines(self):
        assert parse_feed(SEGMENT_FEED).total_lines == 8


# ═══════════════════════════════════════════════════════════════════════════
# Sectioned feed
# ═══════════════════════════════════════════════════════════════════════════

class TestSectionedFeed:
    def test_categories_follow_section_rows(self):
        items = parse_catalog(SECTIONED_FEED, SECTIONED_LAYOUT)
        assert [(item.article, item.category) for item in items] == [
            ("P-1", "Pumps"),
            ("P-2", "Pumps"),
            ("F-1", "Filters"),
        ]

    def test_section_headers_recorded(self):
        result = parse_feed(SECTIONED_FEED, SECTIONED_LAYOUT)
        assert result.section_headers == ["Pumps", "Filters"]
        assert result.skipped_rows == []

    def test_crlf_line_endings(self):
        items = parse_catalog(SECTIONED_FEED, SECTIONED_LAYOUT)
        assert items[0].description == "Quiet, 220V"
        assert items[1].promo_price == 150.0
        assert not any("\r" in item.name for item in items)

    def test_header_affects_only_later_rows(self):
        feed = "\n".join(["t", "h", "P-0,Early,,10", ",Pumps,", "P-1,Pump A,,100"])
        items = parse_catalog(feed, SECTIONED_LAYOUT)
        assert items[0].category == DEFAULT_CATEGORY
        assert items[1].category == "Pumps"

    def test_header_lines_skipped(self):
        """Both title and column header lines are skipped, not parsed as data."""
        items = parse_catalog(SECTIONED_FEED, SECTIONED_LAYOUT)
        assert "Наименование" not in [item.name for item in items]


# ═══════════════════════════════════════════════════════════════════════════
# Empty and degenerate input
# ═══════════════════════════════════════════════════════════════════════════

class TestEmptyInput:
    @pytest.mark.parametrize("feed", ["", None])
    def test_empty_feed(self, feed):
        assert parse_catalog(feed) == []

    def test_header_only(self):
        assert parse_catalog("list,article,name\n") == []

    def test_two_header_lines_only(self):
        assert parse_catalog("title\r\nheader", SECTIONED_LAYOUT) == []

    def test_garbage_does_not_raise(self):
        feed = 'h\n"""\n,,"\n\x00\x01,\n"a,b'
        assert isinstance(parse_catalog(feed), list)


# ═══════════════════════════════════════════════════════════════════════════
# Catalog-wide properties
# ═══════════════════════════════════════════════════════════════════════════

class TestInvariants:
    @pytest.mark.parametrize("feed,layout", [
        (SEGMENT_FEED, SEGMENT_LAYOUT),
        (SECTIONED_FEED, SECTIONED_LAYOUT),
    ])
    def test_item_invariants(self, feed, layout):
        for item in parse_catalog(feed, layout):
            assert item.name or item.article
            assert item.category
            assert item.promo_price is None or item.promo_price > 0
            assert item.price >= 0

    def test_reparse_is_idempotent(self):
        first = parse_catalog(SEGMENT_FEED)
        second = parse_catalog(SEGMENT_FEED)
        assert first == second
        assert len(first) == len(second)

    def test_ids_unique_with_duplicate_articles(self):
        feed = "h\nbyt,A-1,One\nbyt,A-1,Two\nbyt,,Three\nbyt,,Four"
        ids = [item.id for item in parse_catalog(feed)]
        assert len(ids) == 4
        assert len(set(ids)) == 4

    def test_overlong_number_keeps_prices_finite(self):
        feed = "h\nbyt,A-1,Pump,,,,," + "9" * 400
        items = parse_catalog(feed)
        assert len(items) == 1
        assert items[0].price == 0
