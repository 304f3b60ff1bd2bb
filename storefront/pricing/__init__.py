"""
Pricing Package for the Storefront
==================================

Pure order pricing and GST computation. No database, HTTP or framework
imports live here; routes and services call into it.

Usage:
------
    from storefront.pricing import CartLine, ShippingPolicy, TaxConfig, price_order

    line = CartLine(line_ref="sku-1", unit_price="999", quantity=1,
                    tax_config=TaxConfig(rate="18"))
    breakdown = price_order([line], ShippingPolicy(free_threshold="499", flat_fee="99"))
    breakdown.grand_total  # Decimal("1178.82")
"""

from .engine import aggregate, compute_line_tax, finalize, price_order, resolve
from .exceptions import (
    InconsistentTotalError,
    InvalidCartLineError,
    InvalidTaxConfigError,
    PriceMismatchError,
    PricingError,
)
from .models import (
    CartLine,
    GstType,
    LineTax,
    OrderPriceBreakdown,
    ResolvedTaxPolicy,
    ShippingPolicy,
    TaxConfig,
)
from .money import format_inr, from_minor_units, round_money, to_minor_units

__all__ = [
    "aggregate",
    "compute_line_tax",
    "finalize",
    "price_order",
    "resolve",
    "InconsistentTotalError",
    "InvalidCartLineError",
    "InvalidTaxConfigError",
    "PriceMismatchError",
    "PricingError",
    "CartLine",
    "GstType",
    "LineTax",
    "OrderPriceBreakdown",
    "ResolvedTaxPolicy",
    "ShippingPolicy",
    "TaxConfig",
    "format_inr",
    "from_minor_units",
    "round_money",
    "to_minor_units",
]
