"""
Result objects for the authentication service layer.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class TokenGrant:
    """Outcome of a successful login or refresh."""

    principal: Any  # Principal instance
    access_token: str
    refresh_token: str
    expires_in: int  # seconds until the access token expires
    token_type: str = "Bearer"
