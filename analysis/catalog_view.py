"""
Pure view-derivation functions for the catalog UI.

filter → group by category, recomputed in full whenever the items or the
filter change.  No side effects: the input items are never modified and
every call builds fresh CategoryGroups.

Group order is explicit:
- "first_seen"  → groups appear in the order their first item appears
                  (the order of the price sheet; the UI default)
- "alphabetical" → groups sorted by name, case-insensitively
Items inside a group always keep their input order.
"""

import logging
from dataclasses import dataclass, fields

from processing.record_assembler import Item

logger = logging.getLogger(__name__)

GROUP_ORDERS: set[str] = {"first_seen", "alphabetical"}

DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("name", "article", "category")

SEARCHABLE_FIELDS: set[str] = {f.name for f in fields(Item)}


@dataclass(frozen=True)
class CategoryGroup:
    """A named bucket of items sharing a category."""

    name: str
    items: tuple[Item, ...] = ()


@dataclass
class ViewFilter:
    """Search text plus facet toggles from the UI."""

    query: str = ""
    new_only: bool = False
    distributor_only: bool = False
    promo_only: bool = False
    search_fields: tuple[str, ...] = DEFAULT_SEARCH_FIELDS

    def __post_init__(self) -> None:
        unknown = [name for name in self.search_fields if name not in SEARCHABLE_FIELDS]
        if unknown:
            raise ValueError(
                f"Unknown search field(s) {unknown}. "
                f"Expected any of: {sorted(SEARCHABLE_FIELDS)}"
            )


def filter_items(items: list[Item], view_filter: ViewFilter) -> list[Item]:
    """
    Keep items matching the search text and every enabled facet.

    The query is trimmed and matched case-insensitively as a substring of
    any of the filter's search_fields.  An empty query matches everything.

    Args:
        items: Parsed catalog items.
        view_filter: Current filter state.

    Returns:
        Matching items in their original order.
    """
    query = view_filter.query.strip().lower()

    filtered = [
        item for item in items
        if _matches_query(item, query, view_filter.search_fields)
        and (not view_filter.new_only or item.is_new)
        and (not view_filter.distributor_only or item.is_distributor)
        and (not view_filter.promo_only or item.has_promo)
    ]

    logger.debug(f"Filter kept {len(filtered)} of {len(items)} items")
    return filtered


def group_by_category(
    items: list[Item],
    order: str = "first_seen",
) -> list[CategoryGroup]:
    """
    Bucket items by category.

    Args:
        items: Items to group (usually the output of filter_items).
        order: "first_seen" or "alphabetical".

    Returns:
        List of CategoryGroup; every input item appears in exactly one group.

    Raises:
        ValueError: If order is not a known group order.
    """
    if order not in GROUP_ORDERS:
        raise ValueError(
            f"Unknown group order '{order}'. Expected one of: {sorted(GROUP_ORDERS)}"
        )

    buckets: dict[str, list[Item]] = {}
    for item in items:
        buckets.setdefault(item.category, []).append(item)

    names = list(buckets)
    if order == "alphabetical":
        names.sort(key=str.casefold)

    return [CategoryGroup(name=name, items=tuple(buckets[name])) for name in names]


def derive_view(
    items: list[Item],
    view_filter: ViewFilter,
    order: str = "first_seen",
) -> list[CategoryGroup]:
    """Filter then group — the full derivation the UI renders."""
    return group_by_category(filter_items(items, view_filter), order=order)


def _matches_query(item: Item, query: str, search_fields: tuple[str, ...]) -> bool:
    if not query:
        return True
    for field_name in search_fields:
        value = getattr(item, field_name)
        if value and query in str(value).lower():
            return True
    return False
