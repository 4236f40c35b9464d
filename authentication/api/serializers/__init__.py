from .auth_serializers import (
    PrincipalCreateSerializer,
    PrincipalSerializer,
    PrincipalUpdateSerializer,
    RegisterSerializer,
)
from .response_serializers import (
    AuthResponseSerializer,
    ErrorResponseSerializer,
    LoginRequestSerializer,
    PrincipalListResponseSerializer,
    RefreshRequestSerializer,
)


__all__ = [
    "PrincipalSerializer",
    "PrincipalCreateSerializer",
    "PrincipalUpdateSerializer",
    "RegisterSerializer",
    "AuthResponseSerializer",
    "ErrorResponseSerializer",
    "LoginRequestSerializer",
    "PrincipalListResponseSerializer",
    "RefreshRequestSerializer",
]
