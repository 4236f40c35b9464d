from .auth_views import LoginAPIView, RefreshTokenAPIView, RegisterAPIView
from .principal_views import PrincipalViewSet


__all__ = [
    "LoginAPIView",
    "RefreshTokenAPIView",
    "RegisterAPIView",
    "PrincipalViewSet",
]
