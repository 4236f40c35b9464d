"""
TokenIssuer - login, refresh, and stateless access-token handling.

Access tokens are HS256 JWTs minted through SimpleJWT with the claims
``sub`` (principal id), ``iat`` and ``exp``. Refresh tokens are opaque
random strings persisted in the database with an absolute expiry.

All time checks go through ``clock`` so expiry can be exercised in tests
without sleeping or patching library internals.
"""

import logging
from datetime import timedelta
from typing import Callable, Optional

import jwt
from django.conf import settings
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from utils.exceptions import Unauthorized, ValidationError
from utils.logging_utils import mask_value

from .credential_store import CredentialStore
from .results import TokenGrant


logger = logging.getLogger(__name__)

EMAIL_REQUIRED = "An email is required to generate a token"
INVALID_CREDENTIALS = "Incorrect email or password"
INVALID_REFRESH_PAIR = "Incorrect email or refreshToken"
REFRESH_EXPIRED = "Invalid refresh token."
INVALID_ACCESS_TOKEN = "Invalid or expired access token"


class TokenIssuer:
    """Issues and validates access tokens; manages refresh tokens."""

    def __init__(
        self,
        credential_store: Optional[CredentialStore] = None,
        clock: Callable = timezone.now,
        access_token_lifetime: Optional[timedelta] = None,
        refresh_token_lifetime: Optional[timedelta] = None,
    ):
        self.credential_store = credential_store or CredentialStore()
        self.clock = clock
        self.access_token_lifetime = access_token_lifetime or api_settings.ACCESS_TOKEN_LIFETIME
        self.refresh_token_lifetime = refresh_token_lifetime or settings.REFRESH_TOKEN_LIFETIME

    # ===== Login / refresh =====

    def login(self, email: Optional[str], password: Optional[str]) -> TokenGrant:
        """
        Exchange email + password for an access/refresh token pair.

        Unknown email and wrong password produce the same error so callers
        cannot probe which accounts exist.

        Raises:
            ValidationError: no email was supplied
            Unauthorized: credentials did not match an active principal
        """
        from authentication.models import Principal

        if not email:
            raise ValidationError(EMAIL_REQUIRED)

        email = str(email).strip().lower()
        password = "" if password is None else str(password)
        principal = Principal.objects.filter(email=email).first()

        if principal is None:
            # Run the hasher once so a missing account costs about the same as a bad password
            self.credential_store.hash(password)
            logger.info(f"Login failed for {mask_value(email)}: unknown email")
            raise Unauthorized(INVALID_CREDENTIALS)

        if not principal.is_active or not self.credential_store.verify(password, principal.password):
            logger.info(f"Login failed for {mask_value(email)}: bad credentials or inactive")
            raise Unauthorized(INVALID_CREDENTIALS)

        logger.info(f"Principal {principal.pk} logged in")
        return self.issue_tokens(principal)

    def refresh(self, email: Optional[str], refresh_token: Optional[str]) -> TokenGrant:
        """
        Issue a fresh access token from a stored refresh token.

        The refresh token itself is not rotated; the same value is returned.

        Raises:
            ValidationError: no email was supplied
            Unauthorized: the pair is unknown, or the refresh token has expired
        """
        from authentication.models import RefreshToken

        if not email:
            raise ValidationError(EMAIL_REQUIRED)

        email = str(email).strip().lower()
        record = None
        if refresh_token:
            record = (
                RefreshToken.objects.select_related("principal")
                .filter(token=refresh_token, user_email=email)
                .first()
            )

        if record is None:
            logger.info(f"Refresh failed for {mask_value(email)}: no matching token")
            raise Unauthorized(INVALID_REFRESH_PAIR)

        if record.is_expired(self.clock()):
            logger.info(f"Refresh failed for {mask_value(email)}: token expired at {record.expires}")
            raise Unauthorized(REFRESH_EXPIRED)

        principal = record.principal
        if not principal.is_active:
            raise Unauthorized(INVALID_REFRESH_PAIR)

        return self._grant(principal, record.token)

    # ===== Tokens =====

    def issue_tokens(self, principal) -> TokenGrant:
        """Issue a new refresh token and an access token for ``principal``."""
        refresh = self.issue_refresh_token(principal)
        return self._grant(principal, refresh.token)

    def issue_refresh_token(self, principal):
        from authentication.models import RefreshToken

        return RefreshToken.generate(principal, lifetime=self.refresh_token_lifetime, now=self.clock())

    def issue_access_token(self, principal) -> str:
        """Mint a signed access token carrying ``sub``, ``iat`` and ``exp``."""
        now = self.clock()
        token = AccessToken()
        token.set_iat(at_time=now)
        token.set_exp(from_time=now, lifetime=self.access_token_lifetime)
        token[api_settings.USER_ID_CLAIM] = str(principal.pk)
        return str(token)

    def decode_access_token(self, raw: str) -> AccessToken:
        """
        Verify signature and expiry of ``raw``.

        A token is accepted strictly before its ``exp`` instant and rejected
        at or after it.

        Raises:
            Unauthorized: malformed, tampered, wrongly typed or expired token
        """
        try:
            # Signature only; time claims are judged against the issuer clock below
            jwt.decode(
                raw,
                api_settings.VERIFYING_KEY or api_settings.SIGNING_KEY,
                algorithms=[api_settings.ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
            token = AccessToken(raw, verify=False)
            if token.get(api_settings.TOKEN_TYPE_CLAIM) != AccessToken.token_type:
                raise TokenError("Token has wrong type")
            token.check_exp(current_time=self.clock())
        except (jwt.InvalidTokenError, TokenError) as e:
            raise Unauthorized(INVALID_ACCESS_TOKEN) from e

        if api_settings.USER_ID_CLAIM not in token:
            raise Unauthorized(INVALID_ACCESS_TOKEN)
        return token

    def _grant(self, principal, refresh_token: str) -> TokenGrant:
        return TokenGrant(
            principal=principal,
            access_token=self.issue_access_token(principal),
            refresh_token=refresh_token,
            expires_in=int(self.access_token_lifetime.total_seconds()),
        )
