# Utils package for the storefront backend

from .exceptions import APIError, Conflict, Forbidden, NotFound, Unauthorized, ValidationError, field_error


__all__ = [
    "APIError",
    "Conflict",
    "Forbidden",
    "NotFound",
    "Unauthorized",
    "ValidationError",
    "field_error",
]
