"""
Pricing Schemas for the Storefront
==================================

Pydantic models for cart lines sent by the client and price breakdowns sent
back. Request models only parse types; business validation (negative rates,
zero quantities) happens when they are converted to pricing value objects, so
the same rules apply whether a cart comes from HTTP or from the database.

Amounts are Decimal and serialize as strings ("1178.82") in JSON.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..pricing import CartLine, OrderPriceBreakdown, TaxConfig
from ..pricing.display import summary_rows
from ..pricing.gst import gst_components
from ..pricing.money import to_minor_units


class TaxConfigPayload(BaseModel):
    """Tax configuration snapshot attached to a cart line."""
    rate: Decimal = Decimal("0")
    inclusive: bool = False
    taxable: bool = True
    gst_type: str = "CGST_SGST"
    hsn_code: str = ""

    def to_domain(self) -> TaxConfig:
        return TaxConfig(
            rate=self.rate,
            inclusive=self.inclusive,
            taxable=self.taxable,
            gst_type=self.gst_type,
            hsn_code=self.hsn_code,
        )

    @classmethod
    def from_domain(cls, tax_config: TaxConfig) -> "TaxConfigPayload":
        return cls(
            rate=tax_config.rate,
            inclusive=tax_config.inclusive,
            taxable=tax_config.taxable,
            gst_type=tax_config.gst_type.value,
            hsn_code=tax_config.hsn_code,
        )


class CartLinePayload(BaseModel):
    """
    A cart line as held by the client between "add to cart" and checkout.

    The tax block is the snapshot returned by POST /cart/lines and must be
    sent back unchanged.
    """
    line_ref: str
    name: Optional[str] = None
    unit_price: Decimal
    quantity: int
    tax: TaxConfigPayload = Field(default_factory=TaxConfigPayload)

    def to_domain(self) -> CartLine:
        return CartLine(
            line_ref=self.line_ref,
            unit_price=self.unit_price,
            quantity=self.quantity,
            tax_config=self.tax.to_domain(),
            name=self.name,
        )

    @classmethod
    def from_domain(cls, line: CartLine) -> "CartLinePayload":
        return cls(
            line_ref=line.line_ref,
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            tax=TaxConfigPayload.from_domain(line.tax_config),
        )


class CartIn(BaseModel):
    lines: List[CartLinePayload]


class AddToCartIn(BaseModel):
    product_id: int
    quantity: int = 1


class LineTaxOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    line_ref: str
    taxable_base: Decimal
    tax_amount: Decimal
    effective_rate: Decimal


class PriceBreakdownOut(BaseModel):
    """
    Response model for an order price breakdown.

    Attributes:
        items_subtotal: Tax-exclusive sum of all lines
        tax_total: Sum of per-line GST
        shipping_fee: 0 when the subtotal reaches the free-shipping threshold
        grand_total: items_subtotal + tax_total + shipping_fee
        lines: Per-line taxable base and tax
    """
    items_subtotal: Decimal
    tax_total: Decimal
    shipping_fee: Decimal
    grand_total: Decimal
    lines: List[LineTaxOut] = []

    @classmethod
    def from_breakdown(cls, breakdown: OrderPriceBreakdown) -> "PriceBreakdownOut":
        return cls(
            items_subtotal=breakdown.items_subtotal,
            tax_total=breakdown.tax_total,
            shipping_fee=breakdown.shipping_fee,
            grand_total=breakdown.grand_total,
            lines=[LineTaxOut.model_validate(line) for line in breakdown.lines],
        )


class SummaryRowOut(BaseModel):
    label: str
    value: str


class QuoteOut(BaseModel):
    """
    Checkout summary for a cart.

    Example:
        {
            "breakdown": {"items_subtotal": "999.00", "tax_total": "179.82", ...},
            "show_tax_line": true,
            "gst_components": {"cgst": "89.91", "sgst": "89.91", "igst": "0.00"},
            "summary": [{"label": "Subtotal", "value": "₹999.00"}, ...],
            "currency": "INR",
            "grand_total_minor": 117882
        }
    """
    breakdown: PriceBreakdownOut
    show_tax_line: bool
    gst_components: Dict[str, Decimal]
    summary: List[SummaryRowOut]
    currency: str
    grand_total_minor: int

    @classmethod
    def from_breakdown(cls, breakdown: OrderPriceBreakdown, currency: str) -> "QuoteOut":
        return cls(
            breakdown=PriceBreakdownOut.from_breakdown(breakdown),
            show_tax_line=breakdown.should_display_tax_line(),
            gst_components=gst_components(breakdown),
            summary=[SummaryRowOut(**row) for row in summary_rows(breakdown)],
            currency=currency,
            grand_total_minor=to_minor_units(breakdown.grand_total),
        )
