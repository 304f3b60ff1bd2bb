"""
Pricing errors.

Every failure raised by the pricing package derives from PricingError so the
HTTP layer can turn any of them into a single "pricing error" response.
"""


class PricingError(Exception):
    """Base exception for order pricing failures."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class InvalidTaxConfigError(PricingError):
    """Raised when a product tax configuration cannot be used for pricing."""

    def __init__(self, message: str, rate=None):
        super().__init__(message=message, code="INVALID_TAX_CONFIG")
        self.rate = rate


class InvalidCartLineError(PricingError):
    """Raised when a cart line has an unusable price or quantity."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message=message, code="INVALID_CART_LINE")
        self.field = field


class InconsistentTotalError(PricingError):
    """Raised when a breakdown's components do not add up to its grand total."""

    def __init__(self, grand_total, expected_total):
        super().__init__(
            message=(
                f"Grand total {grand_total} does not equal "
                f"subtotal + tax + shipping ({expected_total})"
            ),
            code="INCONSISTENT_TOTAL",
        )
        self.grand_total = grand_total
        self.expected_total = expected_total


class PriceMismatchError(PricingError):
    """Raised when a recomputed total disagrees with a submitted or stored one."""

    def __init__(self, expected, actual, source: str = "client"):
        super().__init__(
            message=f"{source} total {actual} does not match computed total {expected}",
            code="PRICE_MISMATCH",
        )
        self.expected = expected
        self.actual = actual
        self.source = source
