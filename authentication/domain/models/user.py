import uuid

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models

from utils.rbac import Role


class PrincipalManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        """Create a principal; the password is hashed through the credential store."""
        from authentication.domain.services.credential_store import CredentialStore

        if not email:
            raise ValueError("An email is required")
        principal = self.model(email=self.normalize_email(email).strip().lower(), **extra_fields)
        if password:
            principal.password = CredentialStore().hash(password)
        else:
            principal.set_unusable_password()
        principal.save(using=self._db)
        return principal

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", Role.ADMIN)
        return self.create_user(email, password, **extra_fields)


class Principal(AbstractBaseUser):
    """An account able to authenticate: a shopper or an administrator."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=128, blank=True, db_index=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PrincipalManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]
        app_label = "authentication"

    def is_admin(self):
        """Check if principal is an admin"""
        return self.role == Role.ADMIN

    def __str__(self):
        return self.email
