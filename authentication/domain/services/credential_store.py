"""
CredentialStore - password hashing and duplicate-identity detection.

Hashing is delegated to Django's bcrypt-sha256 hasher; the only thing this
module decides is the cost factor. ``PASSWORD_HASH_ROUNDS`` is lowered in
the test settings so the suite stays fast, production keeps a cost high
enough to resist offline brute force.
"""

import logging
from typing import Optional

from django.conf import settings
from django.contrib.auth.hashers import BCryptSHA256PasswordHasher, check_password, make_password
from django.db import IntegrityError, transaction

from utils.exceptions import Conflict, field_error
from utils.logging_utils import mask_value
from utils.rbac import Role


logger = logging.getLogger(__name__)


def is_unique_violation(error) -> bool:
    """True when ``error`` is the database rejecting a duplicate value."""
    if not isinstance(error, IntegrityError):
        return False
    message = str(error).lower()
    return "unique" in message or "duplicate" in message


def check_duplicate(error, field: str = "email"):
    """
    Return a Conflict error if ``error`` is a uniqueness violation.

    Any other error is returned unchanged so the caller can re-raise it.

    Example:
        >>> try:
        ...     principal.save()
        ... except IntegrityError as e:
        ...     raise check_duplicate(e) from e
    """
    if is_unique_violation(error):
        return Conflict(
            "Validation Error",
            errors=[field_error(field, f'"{field}" already exists')],
        )
    return error


class CredentialStore:
    """Owns password hashing/verification and duplicate-identity detection."""

    def __init__(self, cost_factor: Optional[int] = None):
        self.cost_factor = cost_factor or settings.PASSWORD_HASH_ROUNDS

    def hash(self, plaintext: str, cost_factor: Optional[int] = None) -> str:
        """Hash ``plaintext`` with bcrypt at the given (or configured) cost."""
        hasher = BCryptSHA256PasswordHasher()
        hasher.rounds = cost_factor or self.cost_factor
        return make_password(plaintext, hasher=hasher)

    check_duplicate = staticmethod(check_duplicate)

    def verify(self, plaintext: str, stored_hash: str) -> bool:
        if not plaintext or not stored_hash:
            return False
        return check_password(plaintext, stored_hash)

    def register(self, email: str, password: str, name: str = "", role: str = Role.USER):
        """
        Persist a new principal with a hashed password.

        Raises:
            Conflict: the email is already registered.
        """
        from authentication.models import Principal

        principal = Principal(
            email=Principal.objects.normalize_email(email).strip().lower(),
            name=name or "",
            role=role,
        )
        principal.password = self.hash(password)

        try:
            with transaction.atomic():
                principal.save()
        except IntegrityError as e:
            logger.info(f"Registration rejected for {mask_value(principal.email)}: duplicate identity")
            raise check_duplicate(e, "email") from e

        logger.info(f"Registered principal {principal.pk} ({mask_value(principal.email)})")
        return principal
