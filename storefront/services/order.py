"""
Order Persistence Service for the Storefront
============================================

Stores placed orders together with their full price breakdown and an
immutable copy of every cart line (OrderLineSnapshot), and re-prices stored
orders on demand.

Key Functions:
--------------
- check_client_total: Refuse an order whose displayed total differs from ours
- persist_order: Create the Order and OrderItem rows
- snapshot_lines: Rebuild CartLine objects from stored OrderItem rows
- verify_order: Re-price a stored order and compare with what was stored

Re-verification:
----------------
verify_order() uses only what was stored with the order: the line snapshots
and the shipping policy in force at placement time. Later changes to products
or to shipping configuration do not affect the result.
"""

import logging
import time
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import config
from ..models import Order, OrderItem
from ..pricing import (
    CartLine,
    LineTax,
    OrderPriceBreakdown,
    PriceMismatchError,
    ShippingPolicy,
    TaxConfig,
    price_order,
    resolve,
    round_money,
)
from ..pricing.money import ZERO

logger = logging.getLogger(__name__)


def generate_order_number(db: Session) -> str:
    """Order numbers look like ORD-<epoch millis>-<4 digit sequence>."""
    count = db.query(func.count(Order.id)).scalar() or 0
    return f"ORD-{int(time.time() * 1000)}-{count + 1:04d}"


def check_client_total(breakdown: OrderPriceBreakdown, client_total: Optional[Decimal]) -> None:
    """
    Raise PriceMismatchError if the client showed a different grand total.

    A missing client_total is accepted.
    """
    if client_total is None:
        return
    if round_money(client_total) != breakdown.grand_total:
        logger.warning(
            "Client total %s differs from computed total %s",
            client_total, breakdown.grand_total,
        )
        raise PriceMismatchError(expected=breakdown.grand_total, actual=round_money(client_total))


def persist_order(
    db: Session,
    lines: List[CartLine],
    breakdown: OrderPriceBreakdown,
    shipping: ShippingPolicy,
    payment_method: str,
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None,
    is_guest_order: bool = False,
    gateway_order_id: Optional[str] = None,
) -> Order:
    """
    Persist an order with its breakdown and line snapshots.

    breakdown must be the result of pricing exactly these lines with this
    shipping policy; lines and breakdown.lines are matched by position.
    """
    if len(lines) != len(breakdown.lines):
        raise ValueError("breakdown does not belong to these cart lines")

    order = Order(
        order_number=generate_order_number(db),
        status="pending",
        customer_name=customer_name,
        customer_email=customer_email,
        is_guest_order=is_guest_order,
        payment_method=payment_method,
        payment_status="unpaid",
        gateway_order_id=gateway_order_id,
        items_price=breakdown.items_subtotal,
        tax_price=breakdown.tax_total,
        shipping_price=breakdown.shipping_fee,
        total_price=breakdown.grand_total,
        currency=config.CURRENCY,
        free_shipping_threshold=shipping.free_threshold,
        flat_shipping_fee=shipping.flat_fee,
    )

    for position, (line, line_tax) in enumerate(zip(lines, breakdown.lines)):
        tax_config = line.tax_config
        order.items.append(OrderItem(
            position=position,
            line_ref=line.line_ref,
            product_name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            gst_rate=tax_config.rate,
            gst_type=tax_config.gst_type.value,
            hsn_code=tax_config.hsn_code,
            gst_inclusive=tax_config.inclusive,
            taxable=tax_config.taxable,
            taxable_base=line_tax.taxable_base,
            tax_amount=line_tax.tax_amount,
        ))

    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info(
        "Order %s persisted: items=%d total=%s payment_method=%s",
        order.order_number, len(lines), order.total_price, payment_method,
    )
    logger.debug("Order %s breakdown: %s", order.order_number, breakdown.to_dict())
    return order


def snapshot_lines(order: Order) -> List[CartLine]:
    """Rebuild the cart lines of a stored order from its snapshots."""
    return [
        CartLine(
            line_ref=item.line_ref,
            unit_price=item.unit_price,
            quantity=item.quantity,
            tax_config=TaxConfig(
                rate=item.gst_rate,
                inclusive=item.gst_inclusive,
                taxable=item.taxable,
                gst_type=item.gst_type,
                hsn_code=item.hsn_code or "",
            ),
            name=item.product_name,
        )
        for item in order.items
    ]


def stored_breakdown(order: Order) -> OrderPriceBreakdown:
    """
    The breakdown exactly as stored on the order rows (no recomputation).

    Only the effective rate is derived, from the stored tax snapshot, so an
    exempt line with a nonzero catalog rate reports 0 here as it does when
    re-priced.
    """
    return OrderPriceBreakdown(
        items_subtotal=round_money(order.items_price),
        tax_total=round_money(order.tax_price if order.tax_price is not None else ZERO),
        shipping_fee=round_money(order.shipping_price if order.shipping_price is not None else ZERO),
        grand_total=round_money(order.total_price),
        lines=tuple(
            LineTax(
                line_ref=item.line_ref,
                taxable_base=round_money(item.taxable_base),
                tax_amount=round_money(item.tax_amount),
                effective_rate=resolve(line.tax_config).effective_rate,
                gst_type=line.tax_config.gst_type,
            )
            for item, line in zip(order.items, snapshot_lines(order))
        ),
    )


def verify_order(order: Order) -> Tuple[bool, OrderPriceBreakdown, OrderPriceBreakdown]:
    """
    Re-price a stored order from its snapshots.

    Returns:
        (consistent, stored, recomputed). consistent is True when the
        subtotal, tax, shipping and grand total all match to the paisa.
    """
    stored = stored_breakdown(order)
    shipping = ShippingPolicy(
        free_threshold=order.free_shipping_threshold,
        flat_fee=order.flat_shipping_fee,
    )
    recomputed = price_order(snapshot_lines(order), shipping)

    consistent = (
        stored.items_subtotal == recomputed.items_subtotal
        and stored.tax_total == recomputed.tax_total
        and stored.shipping_fee == recomputed.shipping_fee
        and stored.grand_total == recomputed.grand_total
    )
    if not consistent:
        logger.warning(
            "Order %s failed re-verification: stored total=%s recomputed total=%s",
            order.order_number, stored.grand_total, recomputed.grand_total,
        )
    return consistent, stored, recomputed
