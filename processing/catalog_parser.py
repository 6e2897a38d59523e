"""
Catalog parser — turns the raw price feed text into catalog Items.

Splits the feed into lines, skips the layout's header lines, and folds the
record assembler over the rest in order, carrying the category context from
one row to the next.  A malformed line is skipped and recorded, never
raised: one bad row in a hand-maintained sheet must not blank the catalog.

Public API:
    parse_feed(feed_text, layout) → CatalogParseResult
    parse_catalog(feed_text, layout) → list[Item]
"""

import logging
import re
from dataclasses import dataclass, field

from config.feed_layout import SEGMENT_LAYOUT, FeedLayout
from processing.record_assembler import Item, assemble_row
from processing.row_tokenizer import tokenize_row

logger = logging.getLogger(__name__)

_LINE_BREAK_PATTERN = re.compile(r"\r?\n")


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class CatalogParseResult:
    """Complete result of parsing one feed snapshot."""

    items: list[Item] = field(default_factory=list)
    skipped_rows: list[dict] = field(default_factory=list)
    """One {"line": index, "reason": text} entry per non-blank skipped line."""

    section_headers: list[str] = field(default_factory=list)
    total_lines: int = 0


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def parse_feed(
    feed_text: str | None,
    layout: FeedLayout = SEGMENT_LAYOUT,
) -> CatalogParseResult:
    """
    Parse a CSV feed into Items using the given column layout.

    Args:
        feed_text: The full feed as text.  None or "" yields an empty result.
        layout: Column positions, header line count and category mode.

    Returns:
        CatalogParseResult with the items in feed order, skipped-line audit,
        the section headers seen, and the number of lines read.
    """
    result = CatalogParseResult()

    if not feed_text:
        logger.info("Empty feed — no items parsed")
        return result

    lines = _LINE_BREAK_PATTERN.split(feed_text)
    result.total_lines = len(lines)

    category_context = layout.default_category

    for line_index in range(layout.header_lines, len(lines)):
        line = lines[line_index].strip()
        if not line:
            continue

        try:
            cells = tokenize_row(line)
            assembly = assemble_row(cells, line_index, layout, category_context)
        except (ValueError, TypeError, IndexError) as exc:
            logger.warning(f"Line {line_index}: could not be parsed ({exc}) — skipped")
            result.skipped_rows.append({
                "line": line_index,
                "reason": f"parse error: {exc}",
            })
            continue

        category_context = assembly.category_context

        if assembly.item is not None:
            result.items.append(assembly.item)
        elif assembly.is_section_header:
            result.section_headers.append(assembly.category_context)
        else:
            logger.debug(f"Line {line_index}: skipped — {assembly.skip_reason}")
            result.skipped_rows.append({
                "line": line_index,
                "reason": assembly.skip_reason,
            })

    logger.info(
        f"Parsed feed with layout '{layout.name}': {len(result.items)} items, "
        f"{len(result.section_headers)} section headers, "
        f"{len(result.skipped_rows)} lines skipped"
    )

    return result


def parse_catalog(
    feed_text: str | None,
    layout: FeedLayout = SEGMENT_LAYOUT,
) -> list[Item]:
    """Parse a feed and return only its items."""
    return parse_feed(feed_text, layout).items
