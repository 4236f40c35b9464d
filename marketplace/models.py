from marketplace.cart.domain.models import CartEntry
from marketplace.catalog.domain.models import Product
from marketplace.ordering.domain.models import Order


__all__ = [
    "Product",
    "CartEntry",
    "Order",
]
