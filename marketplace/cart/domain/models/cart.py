import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from marketplace.catalog.domain.models.catalog import Product


class CartEntry(models.Model):
    """One product line in a user's cart.

    Entries stay ``pending`` until an order consumes the cart; only one pending
    entry may exist per (user, product).
    """

    STATUS_PENDING = "pending"
    STATUS_ORDERED = "ordered"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ORDERED, "Ordered"),
    ]

    MAX_AMOUNT = 10

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_entries")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="cart_entries")
    amount = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(MAX_AMOUNT)]
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Cart Entry"
        verbose_name_plural = "Cart Entries"
        app_label = "marketplace"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"],
                condition=models.Q(status="pending"),
                name="unique_pending_cart_entry",
            ),
        ]

    def __str__(self):
        return f"{self.amount}x {self.product_id} in {self.user_id}'s cart"
