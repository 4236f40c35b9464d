from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.api.serializers import (
    ErrorResponseSerializer,
    PrincipalCreateSerializer,
    PrincipalListResponseSerializer,
    PrincipalSerializer,
    PrincipalUpdateSerializer,
)
from infrastructure.container import get_container
from utils.pagination import filter_params, page_payload, pagination_params
from utils.rbac import Capability


PAGINATION_PARAMETERS = [
    OpenApiParameter("page", int, description="1-based page number (default 1)"),
    OpenApiParameter("perPage", int, description="Page size (default 30, max 100)"),
]

ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid access token"),
    403: OpenApiResponse(response=ErrorResponseSerializer, description="Caller lacks the required role"),
}


@extend_schema_view(
    list=extend_schema(
        operation_id="users_list",
        summary="List users (admin)",
        parameters=PAGINATION_PARAMETERS
        + [
            OpenApiParameter("name", str, description="Case-insensitive substring of the name"),
            OpenApiParameter("email", str),
            OpenApiParameter("role", str, enum=["user", "admin"]),
        ],
        responses={200: PrincipalListResponseSerializer, **ERRORS},
    ),
    create=extend_schema(
        operation_id="users_create",
        summary="Create a user (admin)",
        request=PrincipalCreateSerializer,
        responses={
            201: PrincipalSerializer,
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already registered"),
            **ERRORS,
        },
    ),
    retrieve=extend_schema(
        operation_id="users_get", summary="Get a user", responses={200: PrincipalSerializer, **ERRORS}
    ),
    update=extend_schema(
        operation_id="users_replace",
        summary="Replace a user's fields",
        request=PrincipalUpdateSerializer,
        responses={200: PrincipalSerializer, **ERRORS},
    ),
    partial_update=extend_schema(
        operation_id="users_update",
        summary="Update a user",
        description="Only administrators may change `role` or `is_active`.",
        request=PrincipalUpdateSerializer,
        responses={200: PrincipalSerializer, **ERRORS},
    ),
    destroy=extend_schema(operation_id="users_delete", summary="Delete a user", responses={204: None, **ERRORS}),
)
@extend_schema(tags=["Users"])
class PrincipalViewSet(viewsets.ViewSet):
    capabilities = {
        "list": Capability.ADMIN_ONLY,
        "create": Capability.ADMIN_ONLY,
        "profile": Capability.ANY_AUTHENTICATED,
        "retrieve": Capability.SELF_OR_ADMIN,
        "update": Capability.SELF_OR_ADMIN,
        "partial_update": Capability.SELF_OR_ADMIN,
        "destroy": Capability.SELF_OR_ADMIN,
    }
    owner_field = "pk"

    def get_service(self):
        return get_container().principal_service()

    def get_object(self, pk):
        principal = self.get_service().get_principal(pk)
        self.check_object_permissions(self.request, principal)
        return principal

    def list(self, request):
        page, per_page = pagination_params(request)
        result = self.get_service().list_principals(filter_params(request, "name", "email", "role"), page, per_page)
        return Response(page_payload(result, PrincipalSerializer), status=status.HTTP_200_OK)

    def create(self, request):
        serializer = PrincipalCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        principal = self.get_service().create_principal(serializer.validated_data)
        return Response(PrincipalSerializer(principal).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(PrincipalSerializer(self.get_object(pk)).data)

    def update(self, request, pk=None):
        return self._update(request, pk)

    def partial_update(self, request, pk=None):
        return self._update(request, pk)

    def destroy(self, request, pk=None):
        self.get_service().delete_principal(self.get_object(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="users_profile",
        summary="Get the logged-in user",
        responses={200: PrincipalSerializer, 401: ERRORS[401]},
    )
    @action(detail=False, methods=["get"])
    def profile(self, request):
        return Response(PrincipalSerializer(request.user).data)

    def _update(self, request, pk):
        principal = self.get_object(pk)
        serializer = PrincipalUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        principal = self.get_service().update_principal(principal, serializer.validated_data, actor=request.user)
        return Response(PrincipalSerializer(principal).data)
