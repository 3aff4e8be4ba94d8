"""Conversion between smallest currency units and display amounts.

The settlement core only ever sees integers. These helpers sit at the
presentation boundary and are applied after the resolver returns.
"""

from decimal import ROUND_HALF_UP, Decimal

STROOPS_PER_XLM = 10_000_000


def to_smallest_units(
    amount: Decimal, units_per_currency: int = STROOPS_PER_XLM
) -> int:
    """
    Convert a display amount to integer smallest units.
    Uses ROUND_HALF_UP for consistency.

    Args:
        amount: Display amount as Decimal (e.g. Decimal("12.5") XLM)
        units_per_currency: Smallest units per display unit

    Returns:
        Amount in smallest units (integer)
    """
    units = amount * units_per_currency
    return int(units.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_display_units(amount: int, units_per_currency: int = STROOPS_PER_XLM) -> Decimal:
    """Convert smallest units to an exact Decimal display amount."""
    return Decimal(amount) / Decimal(units_per_currency)


def format_amount(amount: int, units_per_currency: int = STROOPS_PER_XLM) -> str:
    """
    Format smallest units with full precision, trimming trailing zeros.

    Example:
        format_amount(12_500_000) == "1.25"
    """
    value = to_display_units(amount, units_per_currency).quantize(Decimal("0.0000001"))
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_currency(
    amount: int,
    currency_code: str = "XLM",
    decimals: int = 2,
    units_per_currency: int = STROOPS_PER_XLM,
) -> str:
    """Format smallest units as a fixed-decimal currency string, e.g. "1.25 XLM"."""
    quantum = Decimal(1).scaleb(-decimals)
    value = to_display_units(amount, units_per_currency).quantize(
        quantum, rounding=ROUND_HALF_UP
    )
    return f"{value:f} {currency_code}"


def truncate_address(address: str) -> str:
    """Shorten a long address to its first and last six characters."""
    if not address or len(address) < 12:
        return address
    return f"{address[:6]}...{address[-6:]}"
