"""Grocery domain API package."""

from grocery.api.errors import register_error_handlers
from grocery.api.routes import cart_router, order_router, product_router

__all__ = ["product_router", "cart_router", "order_router", "register_error_handlers"]
