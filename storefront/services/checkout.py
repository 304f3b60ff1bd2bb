"""
Checkout Pricing Service
========================

The one place the HTTP layer gets prices from. The checkout quote, the payment
gateway order request and order placement all call quote_cart() with the same
cart lines, so the three numbers cannot drift apart.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from .. import config
from ..models import Product
from ..pricing import CartLine, OrderPriceBreakdown, ShippingPolicy, price_order

logger = logging.getLogger(__name__)


def default_shipping_policy() -> ShippingPolicy:
    """Shipping policy from configuration (free at or above the threshold)."""
    return ShippingPolicy(
        free_threshold=config.FREE_SHIPPING_THRESHOLD,
        flat_fee=config.FLAT_SHIPPING_FEE,
    )


def cart_lines_from_payload(payloads: Iterable) -> List[CartLine]:
    """Convert CartLinePayload models to validated CartLine value objects."""
    return [payload.to_domain() for payload in payloads]


def quote_cart(
    lines: List[CartLine],
    shipping: Optional[ShippingPolicy] = None,
) -> OrderPriceBreakdown:
    """Price a cart with the given (or configured) shipping policy."""
    shipping = shipping or default_shipping_policy()
    breakdown = price_order(lines, shipping)
    logger.info(
        "Cart priced: lines=%d subtotal=%s tax=%s shipping=%s total=%s",
        len(lines),
        breakdown.items_subtotal,
        breakdown.tax_total,
        breakdown.shipping_fee,
        breakdown.grand_total,
    )
    return breakdown


def snapshot_product(db: Session, product_id: int, quantity: int = 1) -> Optional[CartLine]:
    """
    Build a cart line from the product's current price and tax attributes.

    Returns None when the product does not exist. The returned line is a copy;
    editing the product afterwards does not change it.
    """
    product = db.get(Product, product_id)
    if product is None:
        return None
    return CartLine.from_product(product, quantity=quantity)
