"""
Numeric converter — turns price cells typed by people into floats.

Price cells arrive as whatever the spreadsheet displayed: "1 234,50 ₽",
"990.00", "12 500 руб.", "по запросу".  Everything that is not a digit, a dot,
a comma or a minus sign is stripped, a comma decimal separator becomes a dot,
and the longest numeric prefix is parsed.  Anything unparseable is 0, which
the UI treats as "price unknown".

Public API:
    parse_numeric(raw) → float
"""

import logging
import math
import re

logger = logging.getLogger(__name__)

# Characters that survive cleaning
_NON_NUMERIC_PATTERN = re.compile(r"[^\d.,\-]")

# Longest leading float, e.g. "12.5.3" → "12.5", "5-3" → "5"
_LEADING_FLOAT_PATTERN = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")


def parse_numeric(raw: object) -> float:
    """
    Convert a raw cell into a number, never raising.

    Args:
        raw: The raw cell value (usually str; None and numbers are accepted).

    Returns:
        The parsed float, or 0.0 for empty / unparseable input.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        try:
            return _finite_or_zero(float(raw), raw)
        except OverflowError:
            logger.debug("Integer too large for a float — using 0")
            return 0.0

    cleaned = _clean_numeric_string(str(raw))
    if cleaned == "":
        return 0.0

    match = _LEADING_FLOAT_PATTERN.match(cleaned)
    if match is None:
        logger.debug(f"Cannot convert '{raw}' to number — using 0")
        return 0.0

    return _finite_or_zero(float(match.group(0)), raw)


def _finite_or_zero(value: float, raw: object) -> float:
    """NaN and infinities (e.g. a 400-digit cell) become 0."""
    if math.isfinite(value):
        return value
    logger.debug(f"Non-finite number from '{raw}' — using 0")
    return 0.0


def _clean_numeric_string(raw_str: str) -> str:
    """
    Strip currency, spaces and words, then normalise the decimal separator.

    Only the first comma is treated as a decimal separator ("1234,50" →
    "1234.50").
    """
    cleaned = _NON_NUMERIC_PATTERN.sub("", raw_str)
    return cleaned.replace(",", ".", 1)
