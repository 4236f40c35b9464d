from django.urls import include, path
from rest_framework.routers import DefaultRouter

from authentication.api.views import LoginAPIView, PrincipalViewSet, RefreshTokenAPIView, RegisterAPIView


router = DefaultRouter(trailing_slash=True)
router.include_root_view = False
router.register(r"users", PrincipalViewSet, basename="users")

urlpatterns = [
    path("auth/register/", RegisterAPIView.as_view(), name="register"),
    path("auth/login/", LoginAPIView.as_view(), name="login"),
    path("auth/refresh-token/", RefreshTokenAPIView.as_view(), name="refresh_token"),
    path("", include(router.urls)),
]
