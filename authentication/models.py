from authentication.domain.models.refresh_token import RefreshToken
from authentication.domain.models.user import Principal


__all__ = [
    "Principal",
    "RefreshToken",
]
