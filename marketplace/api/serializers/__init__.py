# Marketplace API Serializers

from marketplace.cart.api.serializers.cart_serializers import CartEntryInputSerializer, CartEntrySerializer
from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderInputSerializer, OrderSerializer

from .response_serializers import (
    CartListResponseSerializer,
    ErrorResponseSerializer,
    OrderListResponseSerializer,
    ProductListResponseSerializer,
)


__all__ = [
    "CartEntryInputSerializer",
    "CartEntrySerializer",
    "ProductSerializer",
    "OrderInputSerializer",
    "OrderSerializer",
    "CartListResponseSerializer",
    "ErrorResponseSerializer",
    "OrderListResponseSerializer",
    "ProductListResponseSerializer",
]
