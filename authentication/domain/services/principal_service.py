"""
PrincipalService - account management.

Covers the admin user listing, profile reads and updates. Creation goes
through the CredentialStore so every password is hashed the same way and
duplicate emails surface as Conflict.
"""

from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from utils.exceptions import Forbidden, NotFound
from utils.logging_utils import sanitize_payload
from utils.rbac import Role, is_admin
from utils.service_base import BaseService, PageResult, apply_filterset, paginate

from .credential_store import CredentialStore, check_duplicate


class PrincipalService(BaseService):
    UPDATABLE_FIELDS = ("email", "name", "role", "is_active")

    def __init__(self, credential_store: Optional[CredentialStore] = None):
        super().__init__()
        self.credential_store = credential_store or CredentialStore()

    @BaseService.log_performance
    def list_principals(
        self, filters: Optional[Dict[str, Any]] = None, page: int = 1, per_page: Optional[int] = None
    ) -> PageResult:
        from authentication.filters import PrincipalFilter
        from authentication.models import Principal

        queryset = apply_filterset(PrincipalFilter, filters, Principal.objects.order_by("-created_at"))
        return paginate(queryset, page, per_page)

    def get_principal(self, principal_id):
        from authentication.models import Principal

        try:
            return Principal.objects.get(pk=principal_id)
        except (Principal.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound("User does not exist")

    @BaseService.log_performance
    def create_principal(self, data: Dict[str, Any]):
        return self.credential_store.register(
            email=data["email"],
            password=data["password"],
            name=data.get("name", ""),
            role=data.get("role", Role.USER),
        )

    @BaseService.log_performance
    def update_principal(self, principal, data: Dict[str, Any], actor):
        """
        Apply a partial update.

        Raises:
            Forbidden: a non-admin tried to change a role or activation flag
            Conflict: the new email belongs to another principal
        """
        self.logger.debug(f"Update of principal {principal.pk} requested: {sanitize_payload(data, data.keys())}")
        if not is_admin(actor) and ("role" in data or "is_active" in data):
            raise Forbidden("Only administrators can change roles")

        updated_fields = []
        for field in self.UPDATABLE_FIELDS:
            if field in data:
                value = data[field]
                if field == "email":
                    value = value.strip().lower()
                setattr(principal, field, value)
                updated_fields.append(field)

        if data.get("password"):
            principal.password = self.credential_store.hash(data["password"])
            updated_fields.append("password")

        if not updated_fields:
            return principal

        updated_fields.append("updated_at")
        try:
            with transaction.atomic():
                principal.save(update_fields=updated_fields)
        except IntegrityError as e:
            raise check_duplicate(e, "email") from e

        self.logger.info(f"Updated principal {principal.pk}, fields={updated_fields}")
        return principal

    @BaseService.log_performance
    def delete_principal(self, principal):
        principal_id = principal.pk
        principal.delete()
        self.logger.info(f"Deleted principal {principal_id}")
