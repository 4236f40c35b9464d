from .refresh_token import RefreshToken
from .user import Principal, PrincipalManager

__all__ = [
    "Principal",
    "PrincipalManager",
    "RefreshToken",
]
