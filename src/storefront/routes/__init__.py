from . import auth, products, relay

__all__ = ["auth", "products", "relay"]
