"""
Record assembler — turns one tokenized feed row into a catalog Item.

Every cell is read by position through the active FeedLayout.  A row ends up
as exactly one of:
  - an Item,
  - a section header (header-driven feeds only) that changes the category
    for the rows that follow,
  - a skip (too few cells, or neither name nor article).

The "current category" of header-driven feeds is passed in and handed back
explicitly, the same way merged-cell section metadata is carried forward to
the data rows beneath it.

Public API:
    assemble_row(cells, line_index, layout, category_context) → AssemblyResult
"""

import logging
from dataclasses import dataclass

from config.feed_layout import FeedLayout
from processing.normalizer import normalize_category, parse_boolean
from processing.numeric_converter import parse_numeric
from processing.row_tokenizer import cell_at

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Item:
    """One priced catalog entry."""

    id: str
    article: str
    name: str
    category: str
    price: float = 0.0
    promo_price: float | None = None
    """Present only when a strictly positive promotional price exists."""

    description: str = ""
    pack: str = ""
    pallet: str = ""
    is_new: bool = False
    is_distributor: bool = False
    image_url: str = ""
    product_url: str = ""

    @property
    def has_promo(self) -> bool:
        return self.promo_price is not None and self.promo_price > 0


@dataclass(frozen=True)
class AssemblyResult:
    """Outcome of assembling one row."""

    item: Item | None
    category_context: str
    skip_reason: str = ""
    """Empty when an item was produced or the row was a section header."""

    is_section_header: bool = False


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def assemble_row(
    cells: list[str],
    line_index: int,
    layout: FeedLayout,
    category_context: str,
) -> AssemblyResult:
    """
    Classify a tokenized row and build an Item from it when it holds one.

    Decision order:
      1. Fewer cells than layout.min_cells → skip.
      2. (header_rows mode) name present, article blank → section header;
         the name becomes the new category context.
      3. Name and article both blank → skip.
      4. Otherwise build the Item.  Its category comes from the segment
         column (column mode) or from the incoming context (header_rows).

    Args:
        cells: Output of tokenize_row() for this line.
        line_index: 0-based index of the line in the feed (used for the id).
        layout: Column positions and category mode of the feed.
        category_context: Category of the most recent section header.

    Returns:
        AssemblyResult with the item (or None), the category context to
        carry into the next row, and a skip reason for skipped rows.
    """
    if len(cells) < layout.min_cells:
        return AssemblyResult(
            item=None,
            category_context=category_context,
            skip_reason=f"too few cells ({len(cells)} < {layout.min_cells})",
        )

    article = _read(cells, layout, "article")
    name = _read(cells, layout, "name")

    if layout.category_mode == "header_rows" and name and not article:
        logger.debug(f"Line {line_index}: section header '{name}'")
        return AssemblyResult(
            item=None,
            category_context=name,
            is_section_header=True,
        )

    if not name and not article:
        return AssemblyResult(
            item=None,
            category_context=category_context,
            skip_reason="blank row (no name or article)",
        )

    if layout.category_mode == "column":
        category = normalize_category(
            _read(cells, layout, "category"),
            code_map=layout.category_codes,
            default=layout.default_category,
        )
    else:
        category = category_context or layout.default_category

    promo_value = parse_numeric(_read(cells, layout, "promo_price"))

    item = Item(
        id=f"item-{line_index}-{article}",
        article=article,
        name=name,
        category=category,
        price=max(parse_numeric(_read(cells, layout, "price")), 0.0),
        promo_price=promo_value if promo_value > 0 else None,
        description=_read(cells, layout, "description"),
        pack=_read(cells, layout, "pack"),
        pallet=_read(cells, layout, "pallet"),
        is_new=parse_boolean(_read(cells, layout, "is_new")),
        is_distributor=parse_boolean(_read(cells, layout, "is_distributor")),
        image_url=_read(cells, layout, "image_url"),
        product_url=_read(cells, layout, "product_url"),
    )

    return AssemblyResult(item=item, category_context=category_context)


# ═══════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═══════════════════════════════════════════════════════════════════════════

def _read(cells: list[str], layout: FeedLayout, field_name: str) -> str:
    """Read a field by its configured position; unmapped fields read as ""."""
    return cell_at(cells, layout.columns.get(field_name))
