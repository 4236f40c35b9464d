from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from infrastructure.container import get_container
from marketplace.api.serializers import ErrorResponseSerializer, ProductListResponseSerializer, ProductSerializer
from marketplace.services import CatalogService
from utils.pagination import filter_params, page_payload, pagination_params
from utils.rbac import Capability


PRODUCT_FILTERS = ("name", "category", "min_price", "max_price", "in_stock")

ADMIN_ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid access token"),
    403: OpenApiResponse(response=ErrorResponseSerializer, description="Admin role required"),
}


@extend_schema_view(
    list=extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Public. Sorted newest first; `name` and `category` match case-insensitively.",
        parameters=[
            OpenApiParameter("page", int, description="1-based page number (default 1)"),
            OpenApiParameter("perPage", int, description="Page size (default 30, max 100)"),
            OpenApiParameter("name", str),
            OpenApiParameter("category", str),
            OpenApiParameter("min_price", float),
            OpenApiParameter("max_price", float),
            OpenApiParameter("in_stock", bool),
        ],
        responses={200: ProductListResponseSerializer},
    ),
    retrieve=extend_schema(
        operation_id="products_get",
        summary="Get a product",
        responses={
            200: ProductSerializer,
            401: ADMIN_ERRORS[401],
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
    ),
    create=extend_schema(
        operation_id="products_create",
        summary="Create a product (admin)",
        request=ProductSerializer,
        responses={201: ProductSerializer, 400: ErrorResponseSerializer, **ADMIN_ERRORS},
    ),
    update=extend_schema(
        operation_id="products_replace",
        summary="Replace a product (admin)",
        request=ProductSerializer,
        responses={200: ProductSerializer, **ADMIN_ERRORS},
    ),
    partial_update=extend_schema(
        operation_id="products_update",
        summary="Update a product (admin)",
        request=ProductSerializer,
        responses={200: ProductSerializer, **ADMIN_ERRORS},
    ),
    destroy=extend_schema(
        operation_id="products_delete", summary="Delete a product (admin)", responses={204: None, **ADMIN_ERRORS}
    ),
)
@extend_schema(tags=["Marketplace - Products"])
class ProductViewSet(viewsets.ViewSet):
    """
    ViewSet for products with full CRUD operations using Service Layer.
    """

    capabilities = {
        "list": None,
        "retrieve": Capability.ANY_AUTHENTICATED,
    }
    default_capability = Capability.ADMIN_ONLY

    def get_service(self) -> CatalogService:
        return get_container().catalog_service()

    def list(self, request):
        page, per_page = pagination_params(request)
        result = self.get_service().list_products(filter_params(request, *PRODUCT_FILTERS), page, per_page)
        return Response(page_payload(result, ProductSerializer))

    def retrieve(self, request, pk=None):
        product = self.get_service().get_product(pk)
        return Response(ProductSerializer(product).data)

    def create(self, request):
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = self.get_service().create_product(serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        service = self.get_service()
        service.delete_product(service.get_product(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, pk, partial):
        service = self.get_service()
        product = service.get_product(pk)

        serializer = ProductSerializer(product, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        product = service.update_product(product, serializer.validated_data)
        return Response(ProductSerializer(product).data)
