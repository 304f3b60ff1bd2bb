"""
Services Package for the Storefront
===================================

Service modules sit between the routes and the pure pricing package. They
receive their dependencies (database sessions, shipping policies) from the
caller instead of creating them.

Available Services:
-------------------
- **checkout**: the shared cart pricing entry point and product snapshots
- **payment**: payment gateway order request payloads
- **order**: order persistence and re-verification

Usage:
------
    from storefront.services.checkout import quote_cart
    from storefront.services.order import persist_order, verify_order
"""

from . import checkout
from . import payment
from . import order

__all__ = ["checkout", "payment", "order"]
