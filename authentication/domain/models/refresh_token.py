import secrets

from django.conf import settings
from django.db import models
from django.utils import timezone


def generate_refresh_token(principal_id) -> str:
    return f"{principal_id}.{secrets.token_hex(40)}"


class RefreshToken(models.Model):
    """Long-lived credential allowing a new access token without the password.

    Records are only ever created and read. Expiry is a timestamp comparison;
    nothing in the request path deletes them.
    """

    token = models.CharField(max_length=255, unique=True)
    principal = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="refresh_tokens")
    user_email = models.EmailField(db_index=True)
    expires = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "authentication"

    @classmethod
    def generate(cls, principal, lifetime=None, now=None):
        """Issue and persist a refresh token for ``principal``."""
        lifetime = lifetime or settings.REFRESH_TOKEN_LIFETIME
        now = now or timezone.now()
        return cls.objects.create(
            token=generate_refresh_token(principal.pk),
            principal=principal,
            user_email=principal.email,
            expires=now + lifetime,
        )

    def is_expired(self, now=None) -> bool:
        return self.expires <= (now or timezone.now())

    def __str__(self):
        return f"Refresh token for {self.user_email}"
