from rest_framework import serializers

from marketplace.models import Order


class OrderSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Order
        fields = ("id", "cart", "total", "status", "user_id", "created_at", "updated_at")
        read_only_fields = fields


class OrderInputSerializer(serializers.Serializer):
    cart = serializers.ListField(
        child=serializers.ListField(min_length=2, max_length=2),
        required=False,
        default=list,
        help_text="[[product_id, quantity], ...]",
    )
    total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)

    def validate_cart(self, value):
        """Each line is ``[product_id, quantity]`` with a positive integer quantity."""
        lines = []
        for product_id, quantity in value:
            if not isinstance(product_id, str) or not product_id:
                raise serializers.ValidationError("Product id must be a non-empty string.")
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise serializers.ValidationError("Quantity must be a positive integer.")
            lines.append([product_id, quantity])
        return lines
