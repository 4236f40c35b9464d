"""
CatalogService - Product CRUD & price lookup

Handles product browsing and administration, and answers the price lookups
the cart needs to aggregate totals.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from marketplace.filters import ProductFilter
from marketplace.models import Product
from utils.exceptions import NotFound
from utils.service_base import BaseService, PageResult, apply_filterset, paginate


class CatalogService(BaseService):
    """
    Service for managing product catalog operations.

    Responsibilities:
    - List products with filtering and pagination
    - Get product details
    - Create, update and delete products (admin only, enforced by the API)
    - Look up a product's unit price
    """

    UPDATABLE_FIELDS = ("name", "category", "price", "stock")

    @BaseService.log_performance
    def list_products(
        self, filters: Optional[Dict[str, Any]] = None, page: int = 1, per_page: Optional[int] = None
    ) -> PageResult:
        """
        List products with filtering and pagination.

        Args:
            filters: ``name`` and ``category`` match case-insensitively on a
                substring; ``min_price``, ``max_price`` and ``in_stock`` narrow further
            page: Page number (1-indexed)
            per_page: Items per page

        Example:
            >>> result = catalog_service.list_products({"category": "books"}, page=1, per_page=20)
            >>> result.total_count
            42
        """
        queryset = apply_filterset(ProductFilter, filters, Product.objects.order_by("-created_at"))
        result = paginate(queryset, page, per_page)

        self.logger.info(f"Listed products: count={result.total_count}, page={page}")
        return result

    def get_product(self, product_id) -> Product:
        """
        Get product details by ID.

        Raises:
            NotFound: no product has this id
        """
        try:
            return Product.objects.get(id=product_id)
        except (Product.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound("Product does not exist")

    def get_price(self, product_id) -> Decimal:
        """
        Return the unit price of a product.

        Raises:
            NotFound: no product has this id
        """
        try:
            price = Product.objects.filter(id=product_id).values_list("price", flat=True).first()
        except (DjangoValidationError, ValueError):
            price = None
        if price is None:
            raise NotFound("Product does not exist")
        return price

    @BaseService.log_performance
    def create_product(self, data: Dict[str, Any]) -> Product:
        product = Product.objects.create(
            name=data["name"],
            category=data["category"],
            price=data["price"],
            stock=data.get("stock", 0),
        )
        self.logger.info(f"Created product: {product.name} (id={product.id})")
        return product

    @BaseService.log_performance
    @transaction.atomic
    def update_product(self, product: Product, data: Dict[str, Any]) -> Product:
        updated_fields = []
        for field in self.UPDATABLE_FIELDS:
            if field in data:
                setattr(product, field, data[field])
                updated_fields.append(field)

        if updated_fields:
            product.save(update_fields=updated_fields + ["updated_at"])

        self.logger.info(f"Updated product: {product.name} (id={product.id}), fields={updated_fields}")
        return product

    @BaseService.log_performance
    def delete_product(self, product: Product) -> None:
        product_id = product.id
        product.delete()
        self.logger.warning(f"Deleted product {product_id}")
