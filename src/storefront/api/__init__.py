"""Storefront API package."""

from storefront.api.dashboard import dashboard_router
from storefront.api.errors import register_error_handlers
from storefront.api.routes import (
    auth_router,
    cart_router,
    category_router,
    checkout_router,
    order_router,
    product_router,
)

ROUTERS = [
    auth_router,
    product_router,
    category_router,
    cart_router,
    checkout_router,
    order_router,
    dashboard_router,
]

__all__ = [
    "ROUTERS",
    "auth_router",
    "cart_router",
    "category_router",
    "checkout_router",
    "dashboard_router",
    "order_router",
    "product_router",
    "register_error_handlers",
]
