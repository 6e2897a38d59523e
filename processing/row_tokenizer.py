"""
Row tokenizer — splits one line of CSV text into cell values.

Spreadsheet exports quote any cell that contains the delimiter, so a
delimiter is only a split point when it sits outside a quoted span.  Quote
characters inside a quoted cell are doubled ("" → ").

Malformed quoting never raises: an unbalanced quote simply stops the split
points before it from being recognised, which keeps the rest of the row
intact rather than failing the whole feed.

Public API:
    tokenize_row(line, delimiter, quote) → list[str]
    cell_at(cells, index) → str
"""

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER: str = ","
DEFAULT_QUOTE: str = '"'

_SPLIT_PATTERNS: dict[tuple[str, str], re.Pattern] = {}


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def tokenize_row(
    line: str,
    delimiter: str = DEFAULT_DELIMITER,
    quote: str = DEFAULT_QUOTE,
) -> list[str]:
    """
    Split a CSV line into cleaned cell strings.

    Args:
        line: One line of feed text (no line terminator).
        delimiter: Cell separator character.
        quote: Quote character.

    Returns:
        List of cells, each trimmed, unquoted, with doubled quotes collapsed.
        An empty line yields a single empty cell.
    """
    if line.count(quote) % 2:
        logger.debug(f"Unbalanced quoting in row: {line[:80]!r}")
    pattern = _split_pattern(delimiter, quote)
    return [_clean_cell(raw, quote) for raw in pattern.split(line)]


def cell_at(cells: list[str], index: int | None) -> str:
    """Return the cell at *index*, or "" if the row is shorter or no index is given."""
    if index is None or index < 0 or index >= len(cells):
        return ""
    return cells[index]


# ═══════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═══════════════════════════════════════════════════════════════════════════

def _split_pattern(delimiter: str, quote: str) -> re.Pattern:
    """
    Build (and memoise) the split regex for a delimiter/quote pair.

    A delimiter splits only when an even number of quote characters follows
    it up to the end of the line, i.e. it is not inside a quoted span.
    """
    key = (delimiter, quote)
    if key not in _SPLIT_PATTERNS:
        d = re.escape(delimiter)
        q = re.escape(quote)
        _SPLIT_PATTERNS[key] = re.compile(
            rf"{d}(?=(?:[^{q}]*{q}[^{q}]*{q})*[^{q}]*$)"
        )
    return _SPLIT_PATTERNS[key]


def _clean_cell(raw: str, quote: str) -> str:
    """Trim, strip one layer of surrounding quotes, collapse doubled quotes."""
    cell = raw.strip()
    if cell.startswith(quote):
        cell = cell[len(quote):]
    if cell.endswith(quote):
        cell = cell[: -len(quote)]
    return cell.replace(quote * 2, quote)
