from django.urls import include, path
from rest_framework.routers import DefaultRouter

from marketplace.cart.api.views.cart_views import CartViewSet
from marketplace.catalog.api.views.product_views import ProductViewSet
from marketplace.ordering.api.views.order_views import OrderViewSet

# Create the main router
router = DefaultRouter()
router.include_root_view = False
router.register(r"products", ProductViewSet, basename="product")
router.register(r"carts", CartViewSet, basename="cart")
router.register(r"orders", OrderViewSet, basename="order")

app_name = "marketplace"

urlpatterns = [
    path("", include(router.urls)),
]
