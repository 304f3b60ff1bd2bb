"""
Configuration Module for the Storefront
=======================================

All environment variables and defaults used by the storefront backend are read
here once, at import time, into typed module constants. `.env` files are
loaded by main.py before this module is imported.

Configuration Categories:
-------------------------
- **Database**: connection URL for order and catalog persistence.

- **Currency & Shipping**: the shop currency and the shipping policy applied
  to every cart (flat fee, waived at or above a subtotal threshold).

- **GST**: catalog defaults and the maximum rate accepted for a product.

- **Payments**: prefix used for gateway order receipts.

- **CORS**: origins allowed to call the API from the browser.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./storefront.db")
- CURRENCY: ISO currency code (default: "INR")
- FREE_SHIPPING_THRESHOLD: Subtotal for free shipping (default: "499")
- FLAT_SHIPPING_FEE: Shipping fee below the threshold (default: "99")
- DEFAULT_GST_RATE: Rate for new products (default: "18")
- MAX_GST_RATE: Highest accepted product rate (default: "28")
- PAYMENT_RECEIPT_PREFIX: Gateway receipt prefix (default: "rcpt")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- LOG_LEVEL, LOG_SQL: see logging_config.py

Usage:
------
    from storefront.config import FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_FEE
"""

import os
from decimal import Decimal
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")


# =============================================================================
# Currency & Shipping Configuration
# =============================================================================
# Amounts are Decimal. Shipping is free when the pre-tax subtotal reaches
# FREE_SHIPPING_THRESHOLD exactly or exceeds it.

CURRENCY: str = os.getenv("CURRENCY", "INR")
FREE_SHIPPING_THRESHOLD: Decimal = Decimal(os.getenv("FREE_SHIPPING_THRESHOLD", "499"))
FLAT_SHIPPING_FEE: Decimal = Decimal(os.getenv("FLAT_SHIPPING_FEE", "99"))


# =============================================================================
# GST Configuration
# =============================================================================

DEFAULT_GST_RATE: Decimal = Decimal(os.getenv("DEFAULT_GST_RATE", "18"))
MAX_GST_RATE: Decimal = Decimal(os.getenv("MAX_GST_RATE", "28"))


# =============================================================================
# Payment Configuration
# =============================================================================
# Gateway orders are created with a receipt "<prefix>_<order_number>".

PAYMENT_RECEIPT_PREFIX: str = os.getenv("PAYMENT_RECEIPT_PREFIX", "rcpt")


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g. "https://shop.example.in"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
