"""
OrderService - Order Lifecycle Management

Turns a user's pending cart into a persisted order and handles order
reads, updates and deletion.
"""

from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from marketplace.filters import OrderFilter
from marketplace.models import Order
from utils.exceptions import NotFound
from utils.service_base import BaseService, PageResult, apply_filterset, paginate

from .cart_service import CartService


class OrderService(BaseService):
    """
    Service for managing order lifecycle.

    Responsibilities:
    - Create orders from the caller's cart
    - List, get, update and delete orders

    Dependencies:
    - CartService: clears the caller's pending cart once the order is taken
    """

    UPDATABLE_FIELDS = ("cart", "total", "status")

    def __init__(self, cart_service: Optional[CartService] = None):
        """
        Initialize OrderService.

        Args:
            cart_service: Service for cart operations (injected)
        """
        super().__init__()
        self.cart_service = cart_service or CartService()

    @BaseService.log_performance
    @transaction.atomic
    def create_order(self, user, data: Dict[str, Any]) -> Order:
        """
        Create an order owned by ``user`` and consume their cart.

        Workflow:
        1. Build the order from ``cart``, ``total`` and optional ``status``
        2. Delete every pending cart entry of ``user``, whatever the order lists
        3. Persist the order

        All three steps share one transaction, so a failed order write leaves
        the cart untouched. ``total`` is stored as submitted.

        Example:
            >>> order = order_service.create_order(user, {"cart": [[str(product.id), 2]], "total": "20.00"})
            >>> order.status
            'pending'
        """
        order = Order(
            user=user,
            cart=data.get("cart", []),
            total=data["total"],
            status=data.get("status", Order.STATUS_PENDING),
        )

        cleared = self.cart_service.clear_pending(user)
        order.save()

        self.logger.info(f"Created order {order.id} for user {user.pk}, cleared {cleared} cart entries")
        return order

    @BaseService.log_performance
    def list_orders(
        self, filters: Optional[Dict[str, Any]] = None, page: int = 1, per_page: Optional[int] = None
    ) -> PageResult:
        queryset = apply_filterset(OrderFilter, filters, Order.objects.order_by("-created_at"))
        return paginate(queryset, page, per_page)

    def get_order(self, order_id) -> Order:
        try:
            return Order.objects.get(id=order_id)
        except (Order.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound("Order does not exist")

    @BaseService.log_performance
    def update_order(self, order: Order, data: Dict[str, Any]) -> Order:
        updated_fields = []
        for field in self.UPDATABLE_FIELDS:
            if field in data:
                setattr(order, field, data[field])
                updated_fields.append(field)

        if updated_fields:
            order.save(update_fields=updated_fields + ["updated_at"])
            self.logger.info(f"Updated order {order.id}, fields={updated_fields}")
        return order

    @BaseService.log_performance
    def delete_order(self, order: Order) -> None:
        order_id = order.id
        order.delete()
        self.logger.info(f"Deleted order {order_id}")
