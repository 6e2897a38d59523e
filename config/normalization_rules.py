"""
Deterministic vocabulary tables for field coercion.

Each table is plain data so a deployment with a different spreadsheet
vocabulary can swap it without touching the parsing logic.

Used by processing/normalizer.py.
"""

# ---------------------------------------------------------------------------
# Category codes (raw column: segment code, e.g. "byt", "prom_2024")
#
# Matched by case-insensitive substring containment, in table order; the
# first code found inside the raw cell wins.
# ---------------------------------------------------------------------------
CATEGORY_CODE_MAP: dict[str, str] = {
    "byt": "Бытовой сегмент",
    "prom": "Промышленный сегмент",
}

# Label used when no code matches, and for rows seen before the first
# section header in header-driven feeds.
DEFAULT_CATEGORY: str = "Прочее"

# ---------------------------------------------------------------------------
# Boolean flags (raw columns: "НОВИНКА", "ДИСТРИБЬЮТОР")
#
# Lowercased, stripped values that mean "yes".  Everything else is False.
# ---------------------------------------------------------------------------
TRUTHY_VALUES: set[str] = {
    "1",
    "true",
    "yes",
    "+",
    "да",
    "д",
}
