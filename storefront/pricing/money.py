"""
Money helpers for rupee amounts.

All amounts are decimal.Decimal. Floats are only accepted at the edges and are
converted through their string form so 0.1 stays 0.1.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
# Largest amount a Numeric(12, 2) money column holds
MAX_AMOUNT = Decimal("9999999999.99")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a user-supplied number to Decimal.

    Raises:
        ValueError: if the value is not a finite number (bools are rejected).
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def round_money(amount: Decimal) -> Decimal:
    """Round to 2 decimal places for currency, half-up."""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    """Rupees to paise, rounded half-up to a whole paisa."""
    paise = (round_money(amount) * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(paise)


def from_minor_units(paise: int) -> Decimal:
    """Paise to rupees."""
    return round_money(Decimal(int(paise)) / HUNDRED)


def format_inr(amount: Decimal, symbol: bool = True) -> str:
    """
    Format an amount for display, e.g. ``format_inr(Decimal("1178.82"))``
    gives ``"₹1,178.82"``.

    Uses western digit grouping; this is a display helper only and must never
    be parsed back into an amount.
    """
    text = f"{round_money(amount):,.2f}"
    return f"₹{text}" if symbol else text
