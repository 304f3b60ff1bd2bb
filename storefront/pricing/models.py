"""
Value objects for order pricing.

TaxConfig and CartLine are validated on construction, so the engine never has
to defend against bad input. Everything here is frozen: a CartLine carries a
copy of the product's tax configuration taken when the line was created, and
later catalog edits cannot reach it.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple

from .exceptions import InvalidCartLineError, InvalidTaxConfigError
from .money import CENTS, MAX_AMOUNT, ZERO, round_money, to_decimal

MAX_HSN_CODE_LENGTH = 10
# Matches the Numeric(5, 2) rate columns order lines are stored in
MAX_RATE_VALUE = Decimal("999.99")


class GstType(str, Enum):
    """How GST applies to a product."""
    CGST_SGST = "CGST_SGST"  # intra-state, split into central + state halves
    IGST = "IGST"  # inter-state, single integrated tax
    EXEMPT = "EXEMPT"
    ZERO_RATED = "ZERO_RATED"

    @property
    def is_untaxed(self) -> bool:
        return self in (GstType.EXEMPT, GstType.ZERO_RATED)


@dataclass(frozen=True)
class TaxConfig:
    """
    Tax configuration of a product.

    Attributes:
        rate: GST percent (18 means 18%). 0 means exempt / zero-rated.
        inclusive: Whether the product price already contains the tax.
        taxable: Master switch. When False the rate is ignored.
        gst_type: CGST_SGST, IGST, EXEMPT or ZERO_RATED.
        hsn_code: Harmonized System code printed on invoices.
    """
    rate: Decimal = Decimal("0")
    inclusive: bool = False
    taxable: bool = True
    gst_type: GstType = GstType.CGST_SGST
    hsn_code: str = ""

    def __post_init__(self):
        try:
            rate = to_decimal(self.rate)
        except ValueError:
            raise InvalidTaxConfigError(f"GST rate must be a number, got {self.rate!r}", rate=self.rate)
        if rate < 0:
            raise InvalidTaxConfigError("GST rate cannot be negative", rate=rate)
        if rate > MAX_RATE_VALUE:
            raise InvalidTaxConfigError(f"GST rate cannot exceed {MAX_RATE_VALUE}", rate=rate)
        if rate != rate.quantize(CENTS):
            raise InvalidTaxConfigError("GST rate can have maximum 2 decimal places", rate=rate)
        object.__setattr__(self, "rate", rate)

        try:
            object.__setattr__(self, "gst_type", GstType(self.gst_type))
        except ValueError:
            raise InvalidTaxConfigError(f"Unknown GST type: {self.gst_type!r}", rate=rate)

        hsn_code = (self.hsn_code or "").strip()
        if len(hsn_code) > MAX_HSN_CODE_LENGTH:
            raise InvalidTaxConfigError(
                f"HSN code cannot exceed {MAX_HSN_CODE_LENGTH} characters", rate=rate
            )
        object.__setattr__(self, "hsn_code", hsn_code)
        object.__setattr__(self, "inclusive", bool(self.inclusive))
        object.__setattr__(self, "taxable", bool(self.taxable))


@dataclass(frozen=True)
class CartLine:
    """
    One line of a cart: a product snapshot, its unit price and a quantity.

    unit_price is normalised to paisa precision on construction.
    """
    line_ref: str
    unit_price: Decimal
    quantity: int
    tax_config: TaxConfig = field(default_factory=TaxConfig)
    name: Optional[str] = None

    def __post_init__(self):
        try:
            unit_price = to_decimal(self.unit_price)
        except ValueError:
            raise InvalidCartLineError(
                f"Unit price must be a number, got {self.unit_price!r}", field="unit_price"
            )
        if unit_price < 0:
            raise InvalidCartLineError("Unit price cannot be negative", field="unit_price")
        if unit_price > MAX_AMOUNT:
            raise InvalidCartLineError(f"Unit price cannot exceed {MAX_AMOUNT}", field="unit_price")
        object.__setattr__(self, "unit_price", round_money(unit_price))

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidCartLineError("Quantity must be a whole number", field="quantity")
        if self.quantity <= 0:
            raise InvalidCartLineError("Quantity must be at least 1", field="quantity")
        if self.unit_price * self.quantity > MAX_AMOUNT:
            raise InvalidCartLineError(f"Line total cannot exceed {MAX_AMOUNT}", field="quantity")

        if not isinstance(self.tax_config, TaxConfig):
            raise InvalidCartLineError("Cart line needs a TaxConfig", field="tax_config")
        object.__setattr__(self, "line_ref", str(self.line_ref))

    @property
    def item_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def from_product(cls, product: Any, quantity: int = 1, line_ref: Optional[str] = None) -> "CartLine":
        """
        Snapshot a catalog product into a cart line.

        The product's current price and tax attributes are copied by value;
        the returned line does not keep a reference to the product.

        Args:
            product: Any object with id, name, price, gst_rate, gst_inclusive,
                     taxable, gst_type and hsn_code attributes (e.g. the
                     Product ORM row).
            quantity: Number of units.
            line_ref: Identifier for the line, defaults to the product id.
        """
        tax_config = TaxConfig(
            rate=getattr(product, "gst_rate", None) or Decimal("0"),
            inclusive=bool(getattr(product, "gst_inclusive", False)),
            taxable=getattr(product, "taxable", True) is not False,
            gst_type=getattr(product, "gst_type", None) or GstType.CGST_SGST,
            hsn_code=getattr(product, "hsn_code", None) or "",
        )
        return cls(
            line_ref=line_ref if line_ref is not None else str(product.id),
            unit_price=product.price,
            quantity=quantity,
            tax_config=tax_config,
            name=getattr(product, "name", None),
        )


@dataclass(frozen=True)
class ShippingPolicy:
    """Flat shipping fee, waived once the subtotal reaches free_threshold."""
    free_threshold: Decimal
    flat_fee: Decimal

    def __post_init__(self):
        for attr in ("free_threshold", "flat_fee"):
            value = to_decimal(getattr(self, attr))
            if value < 0:
                raise ValueError(f"{attr} cannot be negative")
            object.__setattr__(self, attr, round_money(value))


@dataclass(frozen=True)
class ResolvedTaxPolicy:
    """Effective rate and mode for one line."""
    effective_rate: Decimal
    inclusive: bool

    @property
    def is_zero(self) -> bool:
        return self.effective_rate == 0


@dataclass(frozen=True)
class LineTax:
    """Per-line result kept on the breakdown for display and audit."""
    line_ref: str
    taxable_base: Decimal
    tax_amount: Decimal
    effective_rate: Decimal = Decimal("0")
    gst_type: GstType = GstType.CGST_SGST


@dataclass(frozen=True)
class OrderPriceBreakdown:
    """
    Final price of an order.

    items_subtotal is always the tax-exclusive base, whatever the tax mode of
    the individual lines, so items_subtotal + tax_total + shipping_fee is the
    grand total.
    """
    items_subtotal: Decimal
    tax_total: Decimal
    shipping_fee: Decimal
    grand_total: Decimal
    lines: Tuple[LineTax, ...] = ()

    def should_display_tax_line(self) -> bool:
        """Zero-rated orders show no tax row at all."""
        return self.tax_total > 0

    @property
    def is_free_shipping(self) -> bool:
        return self.shipping_fee == ZERO

    def to_dict(self) -> dict:
        """Plain dict with string amounts, for JSON payloads and logs."""
        return {
            "items_subtotal": str(self.items_subtotal),
            "tax_total": str(self.tax_total),
            "shipping_fee": str(self.shipping_fee),
            "grand_total": str(self.grand_total),
            "lines": [
                {
                    "line_ref": line.line_ref,
                    "taxable_base": str(line.taxable_base),
                    "tax_amount": str(line.tax_amount),
                    "effective_rate": str(line.effective_rate),
                    "gst_type": line.gst_type.value,
                }
                for line in self.lines
            ],
        }
