"""Storefront API: admin auth, product catalog, contact relay and chat assistant."""

__version__ = "0.1.0"
