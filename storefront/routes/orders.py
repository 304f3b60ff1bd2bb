"""
Order Routes for the Storefront
===============================

Endpoints for placing orders and reading them back.

Endpoints:
----------
- POST /orders: Place an order (guest or registered customer)
- GET /orders/{id}: Get an order with its breakdown and line snapshots
- GET /orders/{id}/verify: Re-price an order from its stored snapshots

Server-side Pricing:
--------------------
The client's numbers are never stored. POST /orders re-prices the submitted
lines; if the client also sends client_total (the total it displayed) and
the two disagree, the order is refused with 409 and nothing is stored.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Order
from ..schemas.orders import (
    OrderCreate,
    OrderDetailOut,
    OrderItemOut,
    OrderVerificationOut,
)
from ..schemas.pricing import PriceBreakdownOut
from ..services.checkout import cart_lines_from_payload, default_shipping_policy, quote_cart
from ..services.order import check_client_total, persist_order, verify_order


logger = logging.getLogger(__name__)

orders_router = APIRouter(prefix="/orders", tags=["Orders"])


def _order_detail(order: Order) -> OrderDetailOut:
    return OrderDetailOut(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        is_guest_order=order.is_guest_order,
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        gateway_order_id=order.gateway_order_id,
        items_price=order.items_price,
        tax_price=order.tax_price,
        shipping_price=order.shipping_price,
        total_price=order.total_price,
        currency=order.currency,
        show_tax_line=order.tax_price > 0,
        items=[OrderItemOut.model_validate(item) for item in order.items],
    )


def _get_order_or_404(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@orders_router.post("", response_model=OrderDetailOut, status_code=201)
def place_order(payload: OrderCreate, db: Session = Depends(get_db)) -> OrderDetailOut:
    """Price the submitted cart server-side and store the order."""
    if not payload.lines:
        raise HTTPException(status_code=400, detail="Cannot place an order with an empty cart")
    if payload.is_guest_order and not payload.customer_email:
        raise HTTPException(status_code=400, detail="Guest orders need a customer email")

    lines = cart_lines_from_payload(payload.lines)
    shipping = default_shipping_policy()
    breakdown = quote_cart(lines, shipping)
    check_client_total(breakdown, payload.client_total)

    order = persist_order(
        db,
        lines,
        breakdown,
        shipping,
        payment_method=payload.payment_method,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        is_guest_order=payload.is_guest_order,
        gateway_order_id=payload.gateway_order_id,
    )
    return _order_detail(order)


@orders_router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(order_id: int, db: Session = Depends(get_db)) -> OrderDetailOut:
    return _order_detail(_get_order_or_404(db, order_id))


@orders_router.get("/{order_id}/verify", response_model=OrderVerificationOut)
def verify_order_totals(order_id: int, db: Session = Depends(get_db)) -> OrderVerificationOut:
    """
    Re-price a stored order from its line snapshots and stored shipping policy.

    Current product data is not consulted.
    """
    order = _get_order_or_404(db, order_id)
    consistent, stored, recomputed = verify_order(order)
    return OrderVerificationOut(
        order_id=order.id,
        consistent=consistent,
        stored=PriceBreakdownOut.from_breakdown(stored),
        recomputed=PriceBreakdownOut.from_breakdown(recomputed),
    )
