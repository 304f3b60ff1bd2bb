"""
Checkout Routes for the Storefront
==================================

Customer-facing endpoints that price a cart. Every endpoint here goes through
services.checkout.quote_cart(), the same function order placement uses.

Endpoints:
----------
- POST /cart/lines: Snapshot a product into a cart line
- POST /pricing/quote: Checkout summary for a cart
- POST /payments/orders: Payment gateway order request for a cart

Cart Lines:
-----------
The client keeps the cart. A line returned by POST /cart/lines carries a copy
of the product's tax configuration; the client sends it back unchanged to the
other endpoints, so a product edited after being added to a cart does not
change the price of that cart.

Usage:
------
    POST /cart/lines {"product_id": 3, "quantity": 2}
    POST /pricing/quote {"lines": [<line>, ...]}
    POST /payments/orders {"lines": [<line>, ...]}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import config
from ..db import get_db
from ..schemas.orders import PaymentOrderIn, PaymentOrderOut
from ..schemas.pricing import (
    AddToCartIn,
    CartIn,
    CartLinePayload,
    PriceBreakdownOut,
    QuoteOut,
)
from ..services.checkout import cart_lines_from_payload, quote_cart, snapshot_product
from ..services.payment import build_gateway_order_request


logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["Cart"])
pricing_router = APIRouter(prefix="/pricing", tags=["Pricing"])
payments_router = APIRouter(prefix="/payments", tags=["Payments"])


@cart_router.post("/lines", response_model=CartLinePayload, status_code=201)
def add_cart_line(payload: AddToCartIn, db: Session = Depends(get_db)) -> CartLinePayload:
    """Return a cart line holding a snapshot of the product's price and tax."""
    line = snapshot_product(db, payload.product_id, quantity=payload.quantity)
    if line is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return CartLinePayload.from_domain(line)


@pricing_router.post("/quote", response_model=QuoteOut)
def quote(payload: CartIn) -> QuoteOut:
    """Subtotal, tax, shipping and total for the checkout summary."""
    breakdown = quote_cart(cart_lines_from_payload(payload.lines))
    return QuoteOut.from_breakdown(breakdown, currency=config.CURRENCY)


@payments_router.post("/orders", response_model=PaymentOrderOut)
def create_payment_order(payload: PaymentOrderIn) -> PaymentOrderOut:
    """
    Build the gateway order request for a cart.

    The amount is the cart's grand total in paise, computed exactly as the
    checkout summary computes it.
    """
    if not payload.lines:
        raise HTTPException(status_code=400, detail="Cart is empty")

    breakdown = quote_cart(cart_lines_from_payload(payload.lines))
    request = build_gateway_order_request(
        breakdown,
        receipt=payload.receipt,
        notes=payload.notes,
    )
    return PaymentOrderOut(
        amount=request["amount"],
        currency=request["currency"],
        receipt=request["receipt"],
        notes=request["notes"],
        breakdown=PriceBreakdownOut.from_breakdown(breakdown),
    )
