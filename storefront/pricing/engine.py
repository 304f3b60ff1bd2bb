"""
Order Pricing Engine
====================

Single implementation of cart/order pricing. The checkout summary, the payment
gateway order request and order persistence all go through price_order(), so
the same cart snapshot always yields the same numbers.

Pipeline:
---------
    CartLine[] + ShippingPolicy
        -> resolve()            per line: effective rate and tax mode
        -> compute_line_tax()   per line: taxable base and tax amount
        -> aggregate()          subtotal, tax, shipping, grand total
        -> finalize()           rounding + additive invariant check

Rounding:
---------
Line tax is rounded once, half-up to the paisa, at the end of
compute_line_tax(). Inclusive lines keep base + tax equal to the price the
customer was quoted. Totals are sums of already-rounded line values, so the
only rounding left in aggregate() is a no-op safety quantize.

Nothing in this module does I/O; every function is safe to call concurrently.
"""

import logging
from decimal import Decimal
from typing import Iterable

from .exceptions import InconsistentTotalError
from .models import (
    CartLine,
    LineTax,
    OrderPriceBreakdown,
    ResolvedTaxPolicy,
    ShippingPolicy,
    TaxConfig,
)
from .money import CENTS, HUNDRED, ZERO, round_money

logger = logging.getLogger(__name__)

ONE = Decimal("1")


def resolve(tax_config: TaxConfig) -> ResolvedTaxPolicy:
    """
    Determine the effective rate and mode for a tax configuration.

    Non-taxable, exempt, zero-rated and 0% products all resolve to a zero
    rate; the inclusive flag is then irrelevant.
    """
    if not tax_config.taxable or tax_config.gst_type.is_untaxed or tax_config.rate == 0:
        return ResolvedTaxPolicy(effective_rate=Decimal("0"), inclusive=False)
    return ResolvedTaxPolicy(effective_rate=tax_config.rate, inclusive=tax_config.inclusive)


def compute_line_tax(line: CartLine) -> LineTax:
    """
    Compute the taxable base and tax amount of one cart line.

    - zero rate: no tax, base is the line total
    - exclusive: tax = total * rate / 100, base is the line total
    - inclusive: the line total contains the tax; base = total / (1 + rate/100)
    """
    item_total = line.item_total
    policy = resolve(line.tax_config)

    if policy.is_zero:
        return LineTax(
            line_ref=line.line_ref,
            taxable_base=round_money(item_total),
            tax_amount=ZERO,
            effective_rate=policy.effective_rate,
            gst_type=line.tax_config.gst_type,
        )

    if policy.inclusive:
        base = item_total / (ONE + policy.effective_rate / HUNDRED)
        tax_amount = round_money(item_total - base)
        taxable_base = round_money(item_total - tax_amount)
    else:
        tax_amount = round_money(item_total * policy.effective_rate / HUNDRED)
        taxable_base = round_money(item_total)

    return LineTax(
        line_ref=line.line_ref,
        taxable_base=taxable_base,
        tax_amount=tax_amount,
        effective_rate=policy.effective_rate,
        gst_type=line.tax_config.gst_type,
    )


def resolve_shipping_fee(items_subtotal: Decimal, shipping: ShippingPolicy, has_lines: bool = True) -> Decimal:
    """Reaching the threshold exactly qualifies for free shipping. Empty carts always pay."""
    if has_lines and items_subtotal >= shipping.free_threshold:
        return ZERO
    return round_money(shipping.flat_fee)


def aggregate(lines: Iterable[CartLine], shipping: ShippingPolicy) -> OrderPriceBreakdown:
    """
    Sum line results into an order breakdown.

    An empty line list is defined but degenerate: subtotal and tax are zero
    and the flat shipping fee still applies.
    """
    line_taxes = tuple(compute_line_tax(line) for line in lines)

    items_subtotal = round_money(sum((lt.taxable_base for lt in line_taxes), ZERO))
    tax_total = round_money(sum((lt.tax_amount for lt in line_taxes), ZERO))
    shipping_fee = resolve_shipping_fee(items_subtotal, shipping, has_lines=bool(line_taxes))
    grand_total = round_money(items_subtotal + tax_total + shipping_fee)

    logger.debug(
        "Aggregated %d line(s): subtotal=%s tax=%s shipping=%s total=%s",
        len(line_taxes), items_subtotal, tax_total, shipping_fee, grand_total,
    )

    return OrderPriceBreakdown(
        items_subtotal=items_subtotal,
        tax_total=tax_total,
        shipping_fee=shipping_fee,
        grand_total=grand_total,
        lines=line_taxes,
    )


def finalize(raw: OrderPriceBreakdown) -> OrderPriceBreakdown:
    """
    Round a breakdown to currency precision and check it adds up.

    Raises:
        InconsistentTotalError: if grand_total is more than one paisa away
            from items_subtotal + tax_total + shipping_fee.
    """
    items_subtotal = round_money(raw.items_subtotal)
    tax_total = round_money(raw.tax_total)
    shipping_fee = round_money(raw.shipping_fee)
    grand_total = round_money(raw.grand_total)

    expected = items_subtotal + tax_total + shipping_fee
    if abs(grand_total - expected) > CENTS:
        logger.error(
            "Inconsistent order total: grand_total=%s expected=%s (subtotal=%s tax=%s shipping=%s)",
            grand_total, expected, items_subtotal, tax_total, shipping_fee,
        )
        raise InconsistentTotalError(grand_total=grand_total, expected_total=expected)

    return OrderPriceBreakdown(
        items_subtotal=items_subtotal,
        tax_total=tax_total,
        shipping_fee=shipping_fee,
        grand_total=grand_total,
        lines=tuple(raw.lines),
    )


def price_order(lines: Iterable[CartLine], shipping: ShippingPolicy) -> OrderPriceBreakdown:
    """Price a cart. The only entry point callers should use."""
    return finalize(aggregate(lines, shipping))
