from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    AuthResponseSerializer,
    ErrorResponseSerializer,
    LoginRequestSerializer,
    PrincipalSerializer,
    RefreshRequestSerializer,
    RegisterSerializer,
)
from infrastructure.container import get_container
from utils.exceptions import ValidationError


def body_fields(request, *names):
    """Pull ``names`` out of a JSON object body; anything else is a 400."""
    if not isinstance(request.data, dict):
        raise ValidationError("Request body must be a JSON object")
    return [request.data.get(name) for name in names]


def token_response(grant):
    return {
        "user": PrincipalSerializer(grant.principal).data,
        "token": {
            "token_type": grant.token_type,
            "access": grant.access_token,
            "refresh": grant.refresh_token,
            "expires_in": grant.expires_in,
        },
    }


AUTH_EXAMPLE = OpenApiExample(
    "Tokens issued",
    value={
        "user": {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "email": "user@example.com",
            "name": "Jane Doe",
            "role": "user",
            "is_active": True,
            "created_at": "2024-01-01T12:00:00Z",
            "updated_at": "2024-01-01T12:00:00Z",
        },
        "token": {
            "token_type": "Bearer",
            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            "refresh": "123e4567-e89b-12d3-a456-426614174000.9f86d081884c7d65...",
            "expires_in": 900,
        },
    },
)


class RegisterAPIView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_register",
        summary="Register a new account",
        description="""
        Create a user account and log it in.

        **Returns:** the new user plus an access/refresh token pair, exactly as login does.
        A duplicate email answers 409 with an `email` field error.
        """,
        request=RegisterSerializer,
        responses={
            201: OpenApiResponse(response=AuthResponseSerializer, examples=[AUTH_EXAMPLE]),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already registered"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        container = get_container()
        principal = container.credential_store().register(**serializer.validated_data)
        grant = container.token_issuer().issue_tokens(principal)

        return Response(token_response(grant), status=status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="""
        Exchange email and password for an access token and a refresh token.

        Unknown email and wrong password produce the same 401 message.
        """,
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=AuthResponseSerializer, examples=[AUTH_EXAMPLE]),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Email missing"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        email, password = body_fields(request, "email", "password")

        grant = get_container().token_issuer().login(email, password)
        return Response(token_response(grant), status=status.HTTP_200_OK)


class RefreshTokenAPIView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_refresh_token",
        summary="Refresh the access token",
        description="""
        Issue a new access token from a refresh token obtained at login.

        The password is not re-checked and the refresh token is returned unchanged.
        """,
        request=RefreshRequestSerializer,
        responses={
            200: OpenApiResponse(response=AuthResponseSerializer, examples=[AUTH_EXAMPLE]),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Email missing"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown or expired refresh token"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        email, refresh_token = body_fields(request, "email", "refresh_token")

        grant = get_container().token_issuer().refresh(email, refresh_token)
        return Response(token_response(grant), status=status.HTTP_200_OK)
