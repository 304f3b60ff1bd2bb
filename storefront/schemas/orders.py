"""
Order Schemas for the Storefront
================================

Pydantic models for placing orders, reading them back and re-verifying their
totals, plus the payment gateway order request.

Order Lifecycle:
----------------
1. Client holds cart lines (with tax snapshots) and shows POST /pricing/quote
2. Client requests a gateway order -> POST /payments/orders (amount in paise)
3. Client places the order -> POST /orders; the server re-prices the same
   lines and refuses the order if client_total disagrees
4. GET /orders/{id}/verify re-prices the stored line snapshots at any time

Guest Orders:
-------------
Orders may be placed without an account; customer_email identifies the
guest and is_guest_order is set on the stored order.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .pricing import CartLinePayload, PriceBreakdownOut

PAYMENT_METHODS = (
    "credit_card",
    "debit_card",
    "paypal",
    "stripe",
    "razorpay",
    "cash_on_delivery",
)


class OrderCreate(BaseModel):
    """
    Request body for placing an order.

    Attributes:
        lines: Cart lines exactly as used for the checkout summary
        payment_method: One of PAYMENT_METHODS
        customer_name: Optional display name
        customer_email: Required for guest orders
        is_guest_order: Whether the customer checked out without an account
        client_total: Grand total the customer was shown, checked server-side
        gateway_order_id: Payment gateway order id, when paying online
    """
    lines: List[CartLinePayload]
    payment_method: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    is_guest_order: bool = False
    client_total: Optional[Decimal] = None
    gateway_order_id: Optional[str] = None

    @field_validator("payment_method")
    @classmethod
    def check_payment_method(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in PAYMENT_METHODS:
            raise ValueError(f"payment_method must be one of {', '.join(PAYMENT_METHODS)}")
        return v


class OrderItemOut(BaseModel):
    """
    Response model for a stored order line (OrderLineSnapshot).

    The tax fields are the values captured when the product was added to the
    cart, not the product's current configuration.
    """
    model_config = ConfigDict(from_attributes=True)

    line_ref: str
    product_name: Optional[str] = None
    unit_price: Decimal
    quantity: int
    gst_rate: Decimal
    gst_type: str
    hsn_code: str
    gst_inclusive: bool
    taxable: bool
    taxable_base: Decimal
    tax_amount: Decimal


class OrderDetailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    status: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    is_guest_order: bool
    payment_method: str
    payment_status: str
    gateway_order_id: Optional[str] = None
    items_price: Decimal
    tax_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    currency: str
    show_tax_line: bool
    items: List[OrderItemOut]


class OrderVerificationOut(BaseModel):
    """
    Result of re-pricing a stored order from its line snapshots.

    Example:
        {
            "order_id": 12,
            "consistent": true,
            "stored": {"items_subtotal": "1298.00", ...},
            "recomputed": {"items_subtotal": "1298.00", ...}
        }
    """
    order_id: int
    consistent: bool
    stored: PriceBreakdownOut
    recomputed: PriceBreakdownOut


class PaymentOrderIn(BaseModel):
    lines: List[CartLinePayload]
    receipt: Optional[str] = None
    notes: Dict[str, str] = {}


class PaymentOrderOut(BaseModel):
    """
    Gateway order request for a cart.

    amount is in the currency's minor unit (paise for INR) and is derived
    from breakdown.grand_total.
    """
    amount: int
    currency: str
    receipt: str
    notes: Dict[str, str]
    breakdown: PriceBreakdownOut
