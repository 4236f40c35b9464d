"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of list responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from authentication.api.serializers.response_serializers import ErrorResponseSerializer
from marketplace.cart.api.serializers.cart_serializers import CartEntrySerializer
from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderSerializer


class ProductListResponseSerializer(serializers.Serializer):
    """Paginated product list response"""

    data = ProductSerializer(many=True)
    totals = serializers.IntegerField(help_text="Number of products matching the filters")


class CartListResponseSerializer(serializers.Serializer):
    """Paginated cart listing with the amount due"""

    data = CartEntrySerializer(many=True)
    totals = serializers.IntegerField(help_text="Number of entries matching the filters")
    total_to_pay = serializers.DecimalField(
        max_digits=14, decimal_places=2, help_text="Sum of price x amount over all matching entries"
    )


class OrderListResponseSerializer(serializers.Serializer):
    """Paginated order list response"""

    data = OrderSerializer(many=True)
    totals = serializers.IntegerField(help_text="Number of orders matching the filters")


__all__ = [
    "ErrorResponseSerializer",
    "ProductListResponseSerializer",
    "CartListResponseSerializer",
    "OrderListResponseSerializer",
]
