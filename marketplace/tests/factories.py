from decimal import Decimal

import factory

from authentication.tests.factories import AdminFactory, PrincipalFactory
from marketplace.models import CartEntry, Order, Product

__all__ = ["AdminFactory", "CartEntryFactory", "OrderFactory", "PrincipalFactory", "ProductFactory"]


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    category = "general"
    price = Decimal("10.00")
    stock = 10


class CartEntryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartEntry

    user = factory.SubFactory(PrincipalFactory)
    product = factory.SubFactory(ProductFactory)
    amount = 1
    status = CartEntry.STATUS_PENDING


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory(PrincipalFactory)
    cart = factory.LazyFunction(list)
    total = Decimal("0.00")
    status = Order.STATUS_PENDING
