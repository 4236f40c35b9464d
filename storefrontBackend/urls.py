"""
URL configuration for storefrontBackend project.

All resource endpoints live under ``/v1/``:

- ``v1/auth/``      register, login and refresh-token flows
- ``v1/users/``     principal management
- ``v1/products/``, ``v1/carts/``, ``v1/orders/``  marketplace resources
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView


urlpatterns = [
    # API Documentation
    path("v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("v1/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("v1/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("v1/", include("authentication.urls")),
    path("v1/", include("marketplace.urls")),
]
