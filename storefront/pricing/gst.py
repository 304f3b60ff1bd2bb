"""
GST rate rules and helpers for the Indian tax model.

Used by the catalog when products are created or edited (rate validation,
category suggestions) and by the checkout summary (CGST/SGST/IGST split).
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from .models import GstType, OrderPriceBreakdown
from .money import CENTS, ZERO, round_money, to_decimal

MAX_GST_RATE = Decimal("28")
STANDARD_GST_RATES = (
    Decimal("0"),
    Decimal("3"),
    Decimal("5"),
    Decimal("12"),
    Decimal("18"),
    Decimal("28"),
)

# Category name -> (rate, note, HSN code)
GST_CATEGORY_SUGGESTIONS: Dict[str, Dict[str, object]] = {
    "clothing": {"rate": Decimal("12"), "note": "Textiles and clothing typically have 12% GST", "hsn": "6203"},
    "textiles": {"rate": Decimal("12"), "note": "Textile products typically have 12% GST", "hsn": "5208"},
    "electronics": {"rate": Decimal("18"), "note": "Electronics typically have 18% GST", "hsn": "8517"},
    "mobile": {"rate": Decimal("18"), "note": "Mobile phones typically have 18% GST", "hsn": "8517"},
    "computer": {"rate": Decimal("18"), "note": "Computers typically have 18% GST", "hsn": "8471"},
    "food": {"rate": Decimal("5"), "note": "Food items typically have 5% GST", "hsn": "1905"},
    "books": {"rate": Decimal("0"), "note": "Books are typically GST exempt (0%)", "hsn": "4901"},
    "cosmetics": {"rate": Decimal("18"), "note": "Cosmetics typically have 18% GST", "hsn": "3304"},
    "jewelry": {"rate": Decimal("3"), "note": "Jewelry typically has 3% GST", "hsn": "7113"},
    "gold": {"rate": Decimal("3"), "note": "Gold jewelry typically has 3% GST", "hsn": "7108"},
    "silver": {"rate": Decimal("3"), "note": "Silver jewelry typically has 3% GST", "hsn": "7106"},
    "automobiles": {"rate": Decimal("28"), "note": "Automobiles typically have 28% GST", "hsn": "8703"},
    "furniture": {"rate": Decimal("12"), "note": "Furniture typically has 12% GST", "hsn": "9403"},
    "medicines": {"rate": Decimal("5"), "note": "Medicines typically have 5% GST", "hsn": "3004"},
    "shoes": {"rate": Decimal("18"), "note": "Footwear typically has 18% GST", "hsn": "6403"},
    "toys": {"rate": Decimal("12"), "note": "Toys typically have 12% GST", "hsn": "9503"},
    "kitchen": {"rate": Decimal("18"), "note": "Kitchen appliances typically have 18% GST", "hsn": "8516"},
}


@dataclass(frozen=True)
class GstRateCheck:
    """Outcome of validate_gst_rate(). A valid rate may still carry a warning."""
    valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None


def is_standard_gst_rate(rate) -> bool:
    try:
        return to_decimal(rate) in STANDARD_GST_RATES
    except ValueError:
        return False


def validate_gst_rate(rate, max_rate: Decimal = MAX_GST_RATE) -> GstRateCheck:
    """
    Validate a GST rate entered for a catalog product.

    Rules: numeric, not negative, at most max_rate, at most two decimal places.
    Whole-number rates outside the standard slabs are accepted with a warning.
    """
    try:
        value = to_decimal(rate)
    except ValueError:
        return GstRateCheck(valid=False, error="Please enter a valid number")

    if value < 0:
        return GstRateCheck(valid=False, error="GST rate cannot be negative")
    if value > max_rate:
        return GstRateCheck(valid=False, error=f"GST rate cannot exceed {max_rate}%")
    if value != value.quantize(CENTS, rounding=ROUND_HALF_UP):
        return GstRateCheck(valid=False, error="GST rate can have maximum 2 decimal places")

    if value == value.to_integral_value() and value not in STANDARD_GST_RATES:
        standard = ", ".join(f"{r}%" for r in STANDARD_GST_RATES)
        return GstRateCheck(
            valid=True,
            warning=f"{value.normalize():f}% is not a standard GST rate. Common rates are {standard}",
        )
    return GstRateCheck(valid=True)


def suggest_gst_rate(category_name: Optional[str]) -> Optional[Dict[str, object]]:
    """Suggest a rate for a category, trying an exact match before a partial one."""
    if not category_name:
        return None
    name = category_name.strip().lower()
    if name in GST_CATEGORY_SUGGESTIONS:
        return GST_CATEGORY_SUGGESTIONS[name]
    for key, suggestion in GST_CATEGORY_SUGGESTIONS.items():
        if key in name or name in key:
            return suggestion
    return None


def common_gst_rates() -> List[Dict[str, object]]:
    return [
        {"rate": Decimal("0"), "label": "0%", "description": "Exempt items"},
        {"rate": Decimal("3"), "label": "3%", "description": "Jewelry, precious metals"},
        {"rate": Decimal("5"), "label": "5%", "description": "Essential items, food"},
        {"rate": Decimal("12"), "label": "12%", "description": "Standard items, textiles"},
        {"rate": Decimal("18"), "label": "18%", "description": "Most goods & services"},
        {"rate": Decimal("28"), "label": "28%", "description": "Luxury items, automobiles"},
    ]


def split_gst(tax_amount: Decimal, gst_type: GstType) -> Dict[str, Decimal]:
    """
    Split a line's tax into invoice components.

    Intra-state tax is shared between CGST and SGST: CGST takes the half-up
    rounded half and SGST the remainder, so the parts always add back up.
    """
    tax_amount = round_money(tax_amount)
    if gst_type == GstType.IGST:
        return {"cgst": ZERO, "sgst": ZERO, "igst": tax_amount}
    cgst = round_money(tax_amount / 2)
    return {"cgst": cgst, "sgst": tax_amount - cgst, "igst": ZERO}


def gst_components(breakdown: OrderPriceBreakdown) -> Dict[str, Decimal]:
    """CGST/SGST/IGST totals for an order. They sum to breakdown.tax_total."""
    totals = {"cgst": ZERO, "sgst": ZERO, "igst": ZERO}
    for line in breakdown.lines:
        if line.tax_amount == 0:
            continue
        for key, amount in split_gst(line.tax_amount, line.gst_type).items():
            totals[key] += amount
    return {key: round_money(amount) for key, amount in totals.items()}
