"""
Routes Package for the Storefront
=================================

API route definitions organized by domain. Each module defines FastAPI
APIRouters with related endpoints grouped together.

- products.py: catalog products with GST attributes
- checkout.py: cart line snapshots, checkout quote, gateway order request
- orders.py: order placement, detail and re-verification

Router Registration:
--------------------
All routers are registered in main.py under /api/v1.

Error Handling:
---------------
Routes raise HTTPException for request problems (400 empty cart, 404 unknown
id). Pricing failures propagate as PricingError subclasses and are turned
into a generic "Pricing error, please retry" response by the handler in
main.py.
"""

from .checkout import cart_router, payments_router, pricing_router
from .orders import orders_router
from .products import products_router

__all__ = [
    "cart_router",
    "payments_router",
    "pricing_router",
    "orders_router",
    "products_router",
]
