"""
Deterministic normalizer — boolean flags and category labels.

Both functions are lookups against the vocabulary tables in
config/normalization_rules.py.  Neither ever raises: an unrecognised flag is
False and an unrecognised segment code falls back to the default category.

Public API:
    parse_boolean(raw, truthy_values) → bool
    normalize_category(raw, code_map, default) → str
"""

import logging

from config.normalization_rules import (
    CATEGORY_CODE_MAP,
    DEFAULT_CATEGORY,
    TRUTHY_VALUES,
)

logger = logging.getLogger(__name__)


def parse_boolean(
    raw: object,
    truthy_values: set[str] = TRUTHY_VALUES,
) -> bool:
    """
    Interpret a flag cell ("Да", "+", "1", "yes", ...).

    Matching is case-insensitive and whitespace-trimmed.
    """
    if raw is None:
        return False
    return str(raw).strip().lower() in truthy_values


def normalize_category(
    raw: object,
    code_map: dict[str, str] = CATEGORY_CODE_MAP,
    default: str = DEFAULT_CATEGORY,
) -> str:
    """
    Map a raw segment code to its category label.

    The first code in *code_map* that is contained in the lowercased cell
    wins, so "prom_byt" maps to whichever of the two codes is listed first.

    Args:
        raw: The raw segment cell.
        code_map: Ordered code (lowercase) → label table.
        default: Label for cells that contain no known code.

    Returns:
        A non-empty category label.
    """
    text = "" if raw is None else str(raw).strip().lower()

    if text:
        for code, label in code_map.items():
            if code.lower() in text:
                return label
        logger.debug(f"Unknown segment code '{raw}' — using '{default}'")

    return default
