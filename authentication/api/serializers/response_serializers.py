"""
Request/Response Serializers for API Documentation

These serializers describe request bodies and responses for OpenAPI schema
generation. Login and refresh bodies are validated by the TokenIssuer itself,
so their request serializers are documentation only.
"""

from rest_framework import serializers

from .auth_serializers import PrincipalSerializer


# ===== Authentication =====


class LoginRequestSerializer(serializers.Serializer):
    """Request body for login"""

    email = serializers.EmailField(help_text="User's email address")
    password = serializers.CharField(write_only=True, style={"input_type": "password"}, help_text="User's password")


class RefreshRequestSerializer(serializers.Serializer):
    """Request body for refreshing an access token"""

    email = serializers.EmailField(help_text="Email the refresh token was issued to")
    refresh_token = serializers.CharField(help_text="Refresh token returned at login")


class TokenSerializer(serializers.Serializer):
    token_type = serializers.CharField(help_text="Always 'Bearer'")
    access = serializers.CharField(help_text="JWT access token")
    refresh = serializers.CharField(help_text="Opaque refresh token")
    expires_in = serializers.IntegerField(help_text="Seconds until the access token expires")


class AuthResponseSerializer(serializers.Serializer):
    """Response for register, login and refresh"""

    user = PrincipalSerializer(help_text="Authenticated user")
    token = TokenSerializer(help_text="Issued tokens")


# ===== Shared =====


class FieldErrorSerializer(serializers.Serializer):
    field = serializers.CharField()
    location = serializers.CharField(help_text="'body' or 'query'")
    messages = serializers.ListField(child=serializers.CharField())


class ErrorResponseSerializer(serializers.Serializer):
    """Error envelope returned by every failing endpoint"""

    message = serializers.CharField(help_text="Error message")
    status = serializers.IntegerField(help_text="HTTP status code")
    errors = FieldErrorSerializer(many=True, required=False, help_text="Field-level details")


class PrincipalListResponseSerializer(serializers.Serializer):
    data = PrincipalSerializer(many=True)
    totals = serializers.IntegerField(help_text="Number of users matching the filters")
