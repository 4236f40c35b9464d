"""
Error taxonomy shared by every app.

Domain operations fail with exactly one of these five kinds. Each one is a DRF
``APIException`` so views can let them propagate and the envelope exception
handler renders ``{message, errors?, status}``.

Usage:
    raise NotFound("Order does not exist")
    raise Conflict(errors=[field_error("email", '"email" already exists')])
"""

from typing import Dict, List, Optional

from rest_framework import exceptions, status


def field_error(field: str, *messages: str, location: str = "body") -> Dict:
    """Build one entry of the envelope's ``errors`` list."""
    return {"field": field, "location": location, "messages": list(messages)}


class APIError(exceptions.APIException):
    """Base class carrying an optional list of field-level errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal Server Error"
    default_code = "error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict]] = None):
        super().__init__(detail=message or self.default_detail)
        self.message = str(self.detail)
        self.errors = errors or []


class ValidationError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation Error"
    default_code = "validation_error"


class Unauthorized(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"
    default_code = "unauthorized"


class Forbidden(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"
    default_code = "forbidden"


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not Found"
    default_code = "not_found"


class Conflict(APIError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Validation Error"
    default_code = "conflict"
