"""
Marketplace Service Layer

This package contains the business logic for the marketplace app, organized
into domain services.

Services:
- CatalogService: Product browsing, CRUD and price lookup
- CartService: Cart entries and the priced cart listing
- OrderService: Cart-to-order transition and order management

Usage:
    from infrastructure.container import get_container

    result = get_container().cart_service().list_entries({"user_id": user.pk})
    result.items, result.total_count, result.extra["total_to_pay"]

Failures are raised as ``utils.exceptions`` errors.
"""

from .cart_service import CartService
from .catalog_service import CatalogService
from .order_service import OrderService

__all__ = [
    "CatalogService",
    "CartService",
    "OrderService",
]
