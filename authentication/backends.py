"""
Bearer-token authentication for the REST API.

Requests without an ``Authorization`` header stay anonymous; the permission
layer then answers 401 for anything that needs a principal. A header that
claims to be a bearer token but cannot be verified is rejected outright.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.settings import api_settings

from infrastructure.container import get_container
from utils.exceptions import Unauthorized


logger = logging.getLogger(__name__)


class BearerTokenAuthentication(JWTAuthentication):
    """
    SimpleJWT authentication whose token checks run through the TokenIssuer,
    so expiry follows the container's clock.
    """

    def get_raw_token(self, header):
        try:
            return super().get_raw_token(header)
        except AuthenticationFailed as e:
            raise Unauthorized("Invalid Authorization header. Expected 'Bearer <token>'.") from e

    def get_validated_token(self, raw_token):
        try:
            raw_token = raw_token.decode() if isinstance(raw_token, bytes) else raw_token
        except UnicodeError:
            raise Unauthorized("Invalid Authorization header. Token contains invalid characters.")
        return get_container().token_issuer().decode_access_token(raw_token)

    def get_user(self, validated_token):
        from authentication.models import Principal

        principal_id = validated_token[api_settings.USER_ID_CLAIM]
        try:
            principal = Principal.objects.filter(pk=principal_id, is_active=True).first()
        except (DjangoValidationError, ValueError):
            principal = None

        if principal is None:
            logger.info(f"Bearer token for unknown or inactive principal {principal_id}")
            raise Unauthorized("User not found or inactive")
        return principal
