"""Integer arithmetic utilities for cents-based prices.

All prices, amounts, and stock values use int (cents / units). No float, no Decimal.
"""

MAX_PRICE_CENTS = 99_999_999  # $999,999.99


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def average_cents(total_cents: int, count: int) -> int:
    """Integer average rounded half up; 0 when count is 0."""
    if count <= 0:
        return 0
    return (2 * total_cents + count) // (2 * count)
