"""
Payment gateway order requests.

Builds the order-creation payload a gateway such as Razorpay expects. The
network call, signature verification and webhooks live outside this service.
"""

import logging
import uuid
from typing import Dict, Optional

from .. import config
from ..pricing import OrderPriceBreakdown, to_minor_units

logger = logging.getLogger(__name__)


def new_receipt() -> str:
    return f"{config.PAYMENT_RECEIPT_PREFIX}_{uuid.uuid4().hex[:16]}"


def build_gateway_order_request(
    breakdown: OrderPriceBreakdown,
    receipt: Optional[str] = None,
    notes: Optional[Dict[str, str]] = None,
    currency: Optional[str] = None,
) -> Dict[str, object]:
    """
    Gateway order payload for a priced cart.

    The charge amount is the breakdown's grand total in minor units
    (rupees * 100, rounded to a whole paisa).
    """
    payload = {
        "amount": to_minor_units(breakdown.grand_total),
        "currency": currency or config.CURRENCY,
        "receipt": receipt or new_receipt(),
        "notes": dict(notes or {}),
    }
    logger.info(
        "Gateway order request built: receipt=%s amount=%d %s",
        payload["receipt"], payload["amount"], payload["currency"],
    )
    return payload
