"""
Schemas Package for the Storefront
==================================

Pydantic request/response models, grouped by domain:

- pricing.py: cart lines, tax snapshots, price breakdowns, checkout quote
- products.py: catalog products with GST attributes
- orders.py: order placement, order detail, verification, gateway requests
"""

from .pricing import (
    AddToCartIn,
    CartIn,
    CartLinePayload,
    LineTaxOut,
    PriceBreakdownOut,
    QuoteOut,
    SummaryRowOut,
    TaxConfigPayload,
)
from .products import GstRateOut, GstRatesOut, GstSuggestionOut, ProductCreate, ProductOut
from .orders import (
    OrderCreate,
    OrderDetailOut,
    OrderItemOut,
    OrderVerificationOut,
    PaymentOrderIn,
    PaymentOrderOut,
)

__all__ = [
    "AddToCartIn",
    "CartIn",
    "CartLinePayload",
    "LineTaxOut",
    "PriceBreakdownOut",
    "QuoteOut",
    "SummaryRowOut",
    "TaxConfigPayload",
    "GstRateOut",
    "GstRatesOut",
    "GstSuggestionOut",
    "ProductCreate",
    "ProductOut",
    "OrderCreate",
    "OrderDetailOut",
    "OrderItemOut",
    "OrderVerificationOut",
    "PaymentOrderIn",
    "PaymentOrderOut",
]
