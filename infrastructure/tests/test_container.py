"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from django.test import SimpleTestCase

from authentication.domain.services import CredentialStore, PrincipalService, TokenIssuer
from infrastructure.container import ServiceContainer, get_container
from marketplace.services import CartService, CatalogService, OrderService


class ServiceContainerTest(SimpleTestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        self.container = ServiceContainer()

    def test_containers_are_independent(self):
        """Each container owns its own service instances."""
        other = ServiceContainer()

        self.assertIsNot(self.container, other)
        self.assertIsNot(self.container.token_issuer(), other.token_issuer())

    def test_app_container_is_shared(self):
        self.assertIsInstance(get_container(), ServiceContainer)
        self.assertIs(get_container(), get_container())

    def test_services_are_cached(self):
        for factory, cls in (
            (self.container.credential_store, CredentialStore),
            (self.container.token_issuer, TokenIssuer),
            (self.container.principal_service, PrincipalService),
            (self.container.catalog_service, CatalogService),
            (self.container.cart_service, CartService),
            (self.container.order_service, OrderService),
        ):
            service = factory()
            self.assertIsInstance(service, cls)
            self.assertIs(service, factory())

    def test_collaborators_are_wired(self):
        self.assertIs(self.container.token_issuer().credential_store, self.container.credential_store())
        self.assertIs(self.container.principal_service().credential_store, self.container.credential_store())
        self.assertIs(self.container.order_service().cart_service, self.container.cart_service())

    def test_injected_clock_reaches_token_issuer(self):
        fixed = datetime(2024, 1, 1, tzinfo=timezone.utc)
        container = ServiceContainer(clock=lambda: fixed)

        self.assertEqual(container.token_issuer().clock(), fixed)

    def test_injected_price_lookup_reaches_cart_service(self):
        lookup = MagicMock(return_value=Decimal("1.00"))
        container = ServiceContainer(price_lookup=lookup)

        self.assertIs(container.cart_service().price_lookup, lookup)

    def test_default_price_lookup_uses_catalog(self):
        self.assertEqual(self.container.cart_service().price_lookup, self.container.catalog_service().get_price)

    def test_reset_drops_cached_services(self):
        issuer = self.container.token_issuer()

        self.container.reset()

        self.assertIsNot(issuer, self.container.token_issuer())
