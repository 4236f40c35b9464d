"""
CartService - Shopping Cart Operations

Handles cart entry CRUD and the priced cart listing. Prices come from an
injected ``price_lookup`` (``product_id -> Decimal``) so the aggregation can
be exercised without a catalog.
"""

from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from authentication.domain.services import check_duplicate
from marketplace.filters import CartEntryFilter
from marketplace.models import CartEntry
from utils.exceptions import NotFound
from utils.service_base import BaseService, PageResult, apply_filterset, paginate


CENTS = Decimal("0.01")


class CartService(BaseService):
    """
    Service for managing shopping cart operations.

    Responsibilities:
    - List cart entries with the amount due across the filtered set
    - Add, update and remove cart entries
    - Clear a user's pending entries once an order consumes them

    Dependencies:
    - price_lookup: unit price of a product by id (defaults to CatalogService.get_price)
    """

    UPDATABLE_FIELDS = ("product_id", "amount", "status")

    def __init__(self, price_lookup: Optional[Callable[[Any], Decimal]] = None):
        """
        Initialize CartService.

        Args:
            price_lookup: Product price lookup (injected); errors it raises propagate
        """
        super().__init__()
        if price_lookup is None:
            from .catalog_service import CatalogService

            price_lookup = CatalogService().get_price
        self.price_lookup = price_lookup

    @BaseService.log_performance
    def list_entries(
        self, filters: Optional[Dict[str, Any]] = None, page: int = 1, per_page: Optional[int] = None
    ) -> PageResult:
        """
        List cart entries and the amount due.

        ``total_to_pay`` is the sum of price * amount over every entry matching
        ``filters``, not just the returned page. Each entry on the page carries
        its ``unit_price``.

        Raises:
            NotFound: an entry references a product the price lookup cannot find
            ValidationError: a filter value could not be parsed

        Example:
            >>> result = cart_service.list_entries({"user_id": user.pk})
            >>> result.extra["total_to_pay"]
            Decimal('20.00')
        """
        queryset = apply_filterset(CartEntryFilter, filters, CartEntry.objects.order_by("-created_at"))
        result = paginate(queryset, page, per_page)

        prices = {}

        def unit_price(product_id):
            if product_id not in prices:
                prices[product_id] = Decimal(self.price_lookup(product_id))
            return prices[product_id]

        total_to_pay = Decimal("0")
        for product_id, amount in queryset.values_list("product_id", "amount"):
            total_to_pay += unit_price(product_id) * amount

        for entry in result.items:
            entry.unit_price = unit_price(entry.product_id)

        result.extra["total_to_pay"] = total_to_pay.quantize(CENTS)
        self.logger.info(f"Listed cart entries: count={result.total_count}, total_to_pay={total_to_pay}")
        return result

    def get_entry(self, entry_id) -> CartEntry:
        try:
            return CartEntry.objects.get(id=entry_id)
        except (CartEntry.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound("Cart entry does not exist")

    @BaseService.log_performance
    def create_entry(self, user, data: Dict[str, Any]) -> CartEntry:
        """
        Add a product to ``user``'s cart. New entries always start pending.

        Raises:
            Conflict: the user already has a pending entry for this product
        """
        entry = CartEntry(
            user=user,
            product_id=data["product_id"],
            amount=data.get("amount", 0),
            status=CartEntry.STATUS_PENDING,
        )
        self._save(entry)
        self.logger.info(f"Added product {entry.product_id} x{entry.amount} to cart of user {user.pk}")
        return entry

    @BaseService.log_performance
    def update_entry(self, entry: CartEntry, data: Dict[str, Any]) -> CartEntry:
        updated_fields = []
        for field in self.UPDATABLE_FIELDS:
            if field in data:
                setattr(entry, field, data[field])
                updated_fields.append("product" if field == "product_id" else field)

        if updated_fields:
            self._save(entry, update_fields=updated_fields + ["updated_at"])
        return entry

    @BaseService.log_performance
    def delete_entry(self, entry: CartEntry) -> None:
        entry.delete()

    def clear_pending(self, user) -> int:
        """Delete every pending cart entry of ``user``; returns how many were removed."""
        deleted, _ = CartEntry.objects.filter(user=user, status=CartEntry.STATUS_PENDING).delete()
        self.logger.info(f"Cleared {deleted} pending cart entries of user {user.pk}")
        return deleted

    def _save(self, entry: CartEntry, update_fields=None):
        try:
            with transaction.atomic():
                entry.save(update_fields=update_fields)
        except IntegrityError as e:
            raise check_duplicate(e, "product_id") from e
