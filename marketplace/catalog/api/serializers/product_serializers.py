from rest_framework import serializers

from marketplace.models import Product


class ProductSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    stock = serializers.IntegerField(min_value=0, required=False, default=0)

    class Meta:
        model = Product
        fields = ("id", "name", "category", "price", "stock", "created_at", "updated_at")
        read_only_fields = ("id", "created_at", "updated_at")
