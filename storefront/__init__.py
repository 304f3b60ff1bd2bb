"""Storefront backend: catalog, checkout pricing with GST, and orders."""

__version__ = "1.0.0"
