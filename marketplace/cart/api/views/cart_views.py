from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from infrastructure.container import get_container
from marketplace.api.serializers import (
    CartEntryInputSerializer,
    CartEntrySerializer,
    CartListResponseSerializer,
    ErrorResponseSerializer,
)
from marketplace.services import CartService
from utils.pagination import filter_params, page_payload, pagination_params
from utils.rbac import Capability, owner_scoped_filters


CART_FILTERS = ("product_id", "status", "amount", "user_id")

ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid access token"),
    403: OpenApiResponse(response=ErrorResponseSerializer, description="Entry belongs to another user"),
    404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart entry not found"),
}


@extend_schema_view(
    list=extend_schema(
        operation_id="cart_list",
        summary="List cart entries",
        description="""
        **What it returns:**
        - `data`: the requested page of entries, each with its `unit_price`
        - `totals`: number of matching entries
        - `total_to_pay`: sum of price x amount over every matching entry

        Non-admin callers only see their own entries; admins may filter by `user_id`.
        """,
        parameters=[
            OpenApiParameter("page", int, description="1-based page number (default 1)"),
            OpenApiParameter("perPage", int, description="Page size (default 30, max 100)"),
            OpenApiParameter("product_id", str),
            OpenApiParameter("status", str, enum=["pending", "ordered"]),
            OpenApiParameter("amount", int),
            OpenApiParameter("user_id", str, description="Admins only"),
        ],
        responses={200: CartListResponseSerializer, 401: ERRORS[401]},
    ),
    create=extend_schema(
        operation_id="cart_add_entry",
        summary="Add a product to the cart",
        request=CartEntryInputSerializer,
        responses={
            201: CartEntrySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Product already in the cart"),
            401: ERRORS[401],
        },
    ),
    retrieve=extend_schema(
        operation_id="cart_get_entry", summary="Get a cart entry", responses={200: CartEntrySerializer, **ERRORS}
    ),
    partial_update=extend_schema(
        operation_id="cart_update_entry",
        summary="Update a cart entry",
        request=CartEntryInputSerializer,
        responses={200: CartEntrySerializer, **ERRORS},
    ),
    destroy=extend_schema(
        operation_id="cart_remove_entry", summary="Remove a cart entry", responses={204: None, **ERRORS}
    ),
)
@extend_schema(tags=["Marketplace - Cart"])
class CartViewSet(viewsets.ViewSet):
    capabilities = {
        "list": Capability.ANY_AUTHENTICATED,
        "create": Capability.ANY_AUTHENTICATED,
        "retrieve": Capability.SELF_OR_ADMIN,
        "partial_update": Capability.SELF_OR_ADMIN,
        "destroy": Capability.SELF_OR_ADMIN,
    }

    def get_service(self) -> CartService:
        # Inject CartService via DI container
        return get_container().cart_service()

    def get_object(self, pk):
        entry = self.get_service().get_entry(pk)
        self.check_object_permissions(self.request, entry)
        return entry

    def list(self, request):
        page, per_page = pagination_params(request)
        filters = owner_scoped_filters(request.user, filter_params(request, *CART_FILTERS))

        result = self.get_service().list_entries(filters, page, per_page)
        payload = page_payload(result, CartEntrySerializer)
        payload["total_to_pay"] = str(result.extra["total_to_pay"])
        return Response(payload)

    def create(self, request):
        serializer = CartEntryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry = self.get_service().create_entry(request.user, serializer.validated_data)
        return Response(CartEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(CartEntrySerializer(self.get_object(pk)).data)

    def partial_update(self, request, pk=None):
        entry = self.get_object(pk)
        serializer = CartEntryInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        entry = self.get_service().update_entry(entry, serializer.validated_data)
        return Response(CartEntrySerializer(entry).data)

    def destroy(self, request, pk=None):
        self.get_service().delete_entry(self.get_object(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
