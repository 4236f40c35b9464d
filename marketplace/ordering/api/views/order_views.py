from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from infrastructure.container import get_container
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    OrderInputSerializer,
    OrderListResponseSerializer,
    OrderSerializer,
)
from marketplace.services import OrderService
from utils.pagination import filter_params, page_payload, pagination_params
from utils.rbac import Capability, owner_scoped_filters


ORDER_FILTERS = ("status", "total", "user_id")

ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid access token"),
    403: OpenApiResponse(response=ErrorResponseSerializer, description="Order belongs to another user"),
    404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
}


@extend_schema_view(
    list=extend_schema(
        operation_id="orders_list",
        summary="List orders",
        description="Non-admin callers only see their own orders; admins may filter by `user_id`.",
        parameters=[
            OpenApiParameter("page", int, description="1-based page number (default 1)"),
            OpenApiParameter("perPage", int, description="Page size (default 30, max 100)"),
            OpenApiParameter("status", str, enum=["pending", "confirmed"]),
            OpenApiParameter("total", float),
            OpenApiParameter("user_id", str, description="Admins only"),
        ],
        responses={200: OrderListResponseSerializer, 401: ERRORS[401]},
    ),
    create=extend_schema(
        operation_id="orders_create",
        summary="Place an order",
        description="""
        **What it receives:**
        - `cart`: `[[product_id, quantity], ...]`
        - `total`: order total, stored as given
        - `status` (optional): `pending` (default) or `confirmed`

        **Side effect:** every pending entry in the caller's cart is removed,
        including products not listed in `cart`.
        """,
        request=OrderInputSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            401: ERRORS[401],
        },
    ),
    retrieve=extend_schema(
        operation_id="orders_get", summary="Get an order", responses={200: OrderSerializer, **ERRORS}
    ),
    partial_update=extend_schema(
        operation_id="orders_update",
        summary="Update an order",
        request=OrderInputSerializer,
        responses={200: OrderSerializer, **ERRORS},
    ),
    destroy=extend_schema(operation_id="orders_delete", summary="Delete an order", responses={204: None, **ERRORS}),
)
@extend_schema(tags=["Marketplace - Orders"])
class OrderViewSet(viewsets.ViewSet):
    capabilities = {
        "list": Capability.ANY_AUTHENTICATED,
        "create": Capability.ANY_AUTHENTICATED,
        "retrieve": Capability.SELF_OR_ADMIN,
        "partial_update": Capability.SELF_OR_ADMIN,
        "destroy": Capability.SELF_OR_ADMIN,
    }

    def get_service(self) -> OrderService:
        return get_container().order_service()

    def get_object(self, pk):
        order = self.get_service().get_order(pk)
        self.check_object_permissions(self.request, order)
        return order

    def list(self, request):
        page, per_page = pagination_params(request)
        filters = owner_scoped_filters(request.user, filter_params(request, *ORDER_FILTERS))

        result = self.get_service().list_orders(filters, page, per_page)
        return Response(page_payload(result, OrderSerializer))

    def create(self, request):
        serializer = OrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self.get_service().create_order(request.user, serializer.validated_data)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(OrderSerializer(self.get_object(pk)).data)

    def partial_update(self, request, pk=None):
        order = self.get_object(pk)
        serializer = OrderInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        order = self.get_service().update_order(order, serializer.validated_data)
        return Response(OrderSerializer(order).data)

    def destroy(self, request, pk=None):
        self.get_service().delete_order(self.get_object(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
