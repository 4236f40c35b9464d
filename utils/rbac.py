import logging
from enum import Enum

from django.db import models

from .exceptions import Forbidden, Unauthorized


logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    """Canonical principal roles."""

    USER = "user", "User"
    ADMIN = "admin", "Admin"


class Capability(Enum):
    """Authorization requirement declared by each protected operation."""

    ANY_AUTHENTICATED = "any_authenticated"
    ADMIN_ONLY = "admin_only"
    SELF_OR_ADMIN = "self_or_admin"


def is_authenticated(principal) -> bool:
    return principal is not None and bool(getattr(principal, "is_authenticated", False))


def is_admin(principal) -> bool:
    """Consistent admin check across the codebase."""
    return is_authenticated(principal) and getattr(principal, "role", None) == Role.ADMIN


def is_owner(principal, owner_id) -> bool:
    if owner_id is None or not is_authenticated(principal):
        return False
    return str(principal.pk) == str(owner_id)


def authorize(principal, capability: Capability, owner_id=None):
    """Raise unless ``principal`` satisfies ``capability``.

    Authentication is checked first: an anonymous caller always gets
    Unauthorized, never Forbidden. ``owner_id`` is the id of the principal
    owning the resource and is only consulted for SELF_OR_ADMIN.
    """
    if not is_authenticated(principal):
        raise Unauthorized("Authentication credentials were not provided.")

    if capability is Capability.ANY_AUTHENTICATED:
        return

    if capability is Capability.ADMIN_ONLY:
        if is_admin(principal):
            return
    elif capability is Capability.SELF_OR_ADMIN:
        if is_admin(principal) or is_owner(principal, owner_id):
            return
    else:
        raise ValueError(f"Unknown capability: {capability!r}")

    logger.warning(
        "RBAC denial: principal_id=%s role=%s required=%s owner_id=%s",
        getattr(principal, "pk", None),
        getattr(principal, "role", None),
        capability.value,
        owner_id,
    )
    raise Forbidden("You do not have permission to perform this action.")


def owner_scoped_filters(principal, filters=None, owner_key="user_id"):
    """Force listings to the caller's own records unless the caller is an admin."""
    scoped = dict(filters or {})
    if not is_admin(principal):
        scoped[owner_key] = str(principal.pk)
    return scoped
