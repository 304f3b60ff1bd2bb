"""Checkout summary rows built from a finalized breakdown."""

from typing import Dict, List

from .models import OrderPriceBreakdown
from .money import format_inr


def summary_rows(breakdown: OrderPriceBreakdown) -> List[Dict[str, str]]:
    """
    Labelled rows for the order summary box.

    The Tax row is left out entirely for zero-tax orders; shipping reads
    "Free" when waived.
    """
    rows = [{"label": "Subtotal", "value": format_inr(breakdown.items_subtotal)}]
    if breakdown.should_display_tax_line():
        rows.append({"label": "Tax", "value": format_inr(breakdown.tax_total)})
    rows.append({
        "label": "Shipping",
        "value": "Free" if breakdown.is_free_shipping else format_inr(breakdown.shipping_fee),
    })
    rows.append({"label": "Total", "value": format_inr(breakdown.grand_total)})
    return rows
