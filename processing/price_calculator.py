"""
Price calculator — display-time price projections.

A customer discount is applied to prices only when they are shown; the
parsed catalog is never modified.  Prices are displayed the way the price
sheet shows them: digits grouped with a non-breaking space and a comma as
the decimal separator.

Public API:
    apply_discount(price, percent) → float
    format_price(value) → str
    is_displayable_url(url) → bool
"""

import math

# Thousands separator used in rendered prices (non-breaking space)
THOUSANDS_SEPARATOR: str = "\u00a0"
DECIMAL_SEPARATOR: str = ","

_URL_PREFIXES: tuple[str, ...] = ("http://", "https://")


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def apply_discount(price: float, percent: float) -> float:
    """
    Apply a percentage discount to a price for display.

    Percent is not clamped; callers keep it within sane bounds.

    Args:
        price: Reference price.
        percent: Discount in percent (10 → 10 %).

    Returns:
        The price unchanged when percent <= 0, otherwise the discounted
        price rounded to whole currency units (halves round up).
    """
    if percent <= 0:
        return price
    return float(math.floor(price * (1 - percent / 100) + 0.5))


def format_price(value: float) -> str:
    """
    Render a price for display, e.g. 1234.5 → "1 234,5".

    At most two decimals are shown and trailing zeros are dropped.
    """
    rounded = round(float(value), 2)
    sign = "-" if rounded < 0 else ""
    whole, _, fraction = f"{abs(rounded):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    grouped = f"{int(whole):,}".replace(",", THOUSANDS_SEPARATOR)
    if fraction:
        return f"{sign}{grouped}{DECIMAL_SEPARATOR}{fraction}"
    return f"{sign}{grouped}"


def is_displayable_url(url: str | None) -> bool:
    """True if *url* looks like an absolute http(s) link worth rendering."""
    if not url:
        return False
    return url.strip().lower().startswith(_URL_PREFIXES)
