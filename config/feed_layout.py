"""
Positional column layouts for the price feed.

The published spreadsheet carries no schema: column meaning is fixed by
position, and the positions differ between deployments.  Every position the
record assembler reads comes from a FeedLayout defined here.

Two feed shapes are known:
  - "column" mode: column A holds a segment code ("byt", "prom") that is
    normalized into the category label.
  - "header_rows" mode: there is no category column; a row with a name but
    no article opens a new section, and every following item belongs to it.

Used by processing/record_assembler.py and processing/catalog_parser.py.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from config.normalization_rules import CATEGORY_CODE_MAP, DEFAULT_CATEGORY

CATEGORY_MODES: set[str] = {"column", "header_rows"}


@dataclass(frozen=True, eq=False)
class FeedLayout:
    """
    One deployment's spreadsheet shape.

    Layouts are immutable: the mapping fields are read-only views, and
    equality and hashing are by identity so a layout can key a dict.
    """

    name: str
    category_mode: str
    columns: Mapping[str, int]
    """field name → 0-based column index.  Missing optional fields read as ""."""

    header_lines: int = 1
    min_cells: int = 3
    category_codes: Mapping[str, str] = field(
        default_factory=lambda: dict(CATEGORY_CODE_MAP)
    )
    default_category: str = DEFAULT_CATEGORY

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))
        object.__setattr__(
            self, "category_codes", MappingProxyType(dict(self.category_codes))
        )
        if self.category_mode not in CATEGORY_MODES:
            raise ValueError(
                f"Unknown category mode '{self.category_mode}'. "
                f"Expected one of: {sorted(CATEGORY_MODES)}"
            )
        if self.category_mode == "column" and "category" not in self.columns:
            raise ValueError(
                f"Layout '{self.name}' uses column mode but maps no 'category' column"
            )
        for required in ("article", "name"):
            if required not in self.columns:
                raise ValueError(
                    f"Layout '{self.name}' must map the '{required}' column"
                )


# ---------------------------------------------------------------------------
# Segment-coded feed (one header line):
#   A(0) segment code   B(1) article    C(2) name        D(3) НОВИНКА
#   E(4) ДИСТРИБЬЮТОР   F(5) pack       G(6) pallet      H(7) РРЦ
#   I(8) АКЦ            M(12) image URL N(13) product URL
# ---------------------------------------------------------------------------
SEGMENT_LAYOUT = FeedLayout(
    name="segment",
    category_mode="column",
    columns={
        "category": 0,
        "article": 1,
        "name": 2,
        "is_new": 3,
        "is_distributor": 4,
        "pack": 5,
        "pallet": 6,
        "price": 7,
        "promo_price": 8,
        "image_url": 12,
        "product_url": 13,
    },
    header_lines=1,
    min_cells=3,
)

# ---------------------------------------------------------------------------
# Sectioned feed (title line + column header line), category from
# blank-article section rows:
#   A(0) article   B(1) name      C(2) description   D(3) price
#   E(4) promo     F(5) pack      G(6) pallet        H(7) new flag
#   I(8) distributor flag         J(9) image URL     K(10) product URL
# ---------------------------------------------------------------------------
SECTIONED_LAYOUT = FeedLayout(
    name="sectioned",
    category_mode="header_rows",
    columns={
        "article": 0,
        "name": 1,
        "description": 2,
        "price": 3,
        "promo_price": 4,
        "pack": 5,
        "pallet": 6,
        "is_new": 7,
        "is_distributor": 8,
        "image_url": 9,
        "product_url": 10,
    },
    header_lines=2,
    min_cells=2,
)

LAYOUTS: dict[str, FeedLayout] = {
    SEGMENT_LAYOUT.name: SEGMENT_LAYOUT,
    SECTIONED_LAYOUT.name: SECTIONED_LAYOUT,
}


def get_layout(name: str) -> FeedLayout:
    """Look up a shipped layout by name (case-insensitive)."""
    key = name.strip().lower()
    if key not in LAYOUTS:
        raise KeyError(
            f"Unknown feed layout '{name}'. Available layouts: {sorted(LAYOUTS)}"
        )
    return LAYOUTS[key]
