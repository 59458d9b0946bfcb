"""Integer arithmetic utilities for package prices.

Prices are stored as int cents. No float, no Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 500 -> '$5.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"
