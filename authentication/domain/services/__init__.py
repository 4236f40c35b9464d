"""
Business logic services for authentication.

Services own password handling, token issuance and account management;
views only translate HTTP to service calls.
"""

from .credential_store import CredentialStore, check_duplicate
from .principal_service import PrincipalService
from .results import TokenGrant
from .token_issuer import TokenIssuer


__all__ = [
    "CredentialStore",
    "PrincipalService",
    "TokenGrant",
    "TokenIssuer",
    "check_duplicate",
]
