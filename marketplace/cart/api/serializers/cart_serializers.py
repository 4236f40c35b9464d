from rest_framework import serializers

from marketplace.models import CartEntry, Product


class CartEntrySerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)
    unit_price = serializers.SerializerMethodField()

    class Meta:
        model = CartEntry
        fields = ("id", "product_id", "user_id", "amount", "status", "unit_price", "created_at", "updated_at")
        read_only_fields = fields

    def get_unit_price(self, obj):
        # Only set on entries returned by the priced listing
        price = getattr(obj, "unit_price", None)
        return None if price is None else f"{price:.2f}"


class CartEntryInputSerializer(serializers.Serializer):
    product_id = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    amount = serializers.IntegerField(min_value=0, max_value=CartEntry.MAX_AMOUNT, required=False, default=0)
    status = serializers.ChoiceField(choices=CartEntry.STATUS_CHOICES, required=False)

    def validate_product_id(self, value):
        return value.pk

    def validate_status(self, value):
        # Entries only leave "pending" through an update
        if not self.partial and value != CartEntry.STATUS_PENDING:
            raise serializers.ValidationError("New cart entries are always pending.")
        return value
