"""
Dependency Injection Container
================================

Explicitly constructed service context. One instance is built when the
``infrastructure`` app is ready and handed to views through
``get_container()``; tests build their own with whatever collaborators
they need (a fixed clock, a stub price lookup).

Usage:
    from infrastructure.container import get_container

    issuer = get_container().token_issuer()
    orders = get_container().order_service()
"""

import logging
from typing import Callable, Optional

from django.apps import apps
from django.utils import timezone

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for application services.

    Services are created lazily and cached per container instance.
    """

    def __init__(self, clock: Callable = timezone.now, price_lookup: Optional[Callable] = None):
        """
        Args:
            clock: Time source used by the token issuer for expiry decisions
            price_lookup: ``product_id -> Decimal`` used by the cart service;
                defaults to the catalog service's ``get_price``
        """
        self.clock = clock
        self._price_lookup = price_lookup

        self._credential_store = None
        self._token_issuer = None
        self._principal_service = None
        self._catalog_service = None
        self._cart_service = None
        self._order_service = None

        logger.info("Service container initialized")

    def credential_store(self):
        """Get CredentialStore instance."""
        if self._credential_store is None:
            from authentication.domain.services import CredentialStore

            self._credential_store = CredentialStore()
            logger.debug("Created CredentialStore")
        return self._credential_store

    def token_issuer(self):
        """Get TokenIssuer instance."""
        if self._token_issuer is None:
            from authentication.domain.services import TokenIssuer

            self._token_issuer = TokenIssuer(credential_store=self.credential_store(), clock=self.clock)
            logger.debug("Created TokenIssuer")
        return self._token_issuer

    def principal_service(self):
        """Get PrincipalService instance."""
        if self._principal_service is None:
            from authentication.domain.services import PrincipalService

            self._principal_service = PrincipalService(credential_store=self.credential_store())
            logger.debug("Created PrincipalService")
        return self._principal_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.services import CatalogService

            self._catalog_service = CatalogService()
            logger.debug("Created CatalogService")
        return self._catalog_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.services import CartService

            # CartService depends on a product price lookup
            price_lookup = self._price_lookup or self.catalog_service().get_price
            self._cart_service = CartService(price_lookup=price_lookup)
            logger.debug("Created CartService")
        return self._cart_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.services import OrderService

            self._order_service = OrderService(cart_service=self.cart_service())
            logger.debug("Created OrderService")
        return self._order_service

    def reset(self):
        """Drop all cached service instances."""
        self._credential_store = None
        self._token_issuer = None
        self._principal_service = None
        self._catalog_service = None
        self._cart_service = None
        self._order_service = None
        logger.info("Service container reset")


def get_container() -> ServiceContainer:
    """Return the container built by the infrastructure app."""
    return apps.get_app_config("infrastructure").container
