"""
Single top-level error renderer for the REST API.

Every failure leaves the API as the same envelope::

    {"message": "...", "errors": [{"field", "location", "messages"}], "status": 400}

``errors`` is only present when there are field-level details. Exceptions that
DRF does not know about are logged and rendered as a 500 envelope so one bad
request never takes the worker down.
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import APIError


logger = logging.getLogger(__name__)


def _location(context) -> str:
    request = context.get("request") if context else None
    if request is not None and request.method in ("GET", "HEAD", "OPTIONS"):
        return "query"
    return "body"


def _flatten(detail, location, prefix=""):
    """Turn DRF's nested ValidationError detail into a flat errors list."""
    if isinstance(detail, dict):
        errors = []
        for field, value in detail.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            errors.extend(_flatten(value, location, name))
        return errors

    if isinstance(detail, list):
        if all(not isinstance(item, (dict, list)) for item in detail):
            return [
                {
                    "field": prefix or "non_field_errors",
                    "location": location,
                    "messages": [str(item) for item in detail],
                }
            ]
        errors = []
        for index, item in enumerate(detail):
            errors.extend(_flatten(item, location, f"{prefix}[{index}]" if prefix else str(index)))
        return errors

    return [{"field": prefix or "non_field_errors", "location": location, "messages": [str(detail)]}]


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view") if context else None
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return Response(
            {"message": "Internal Server Error", "status": status.HTTP_500_INTERNAL_SERVER_ERROR},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    errors = []
    if isinstance(exc, APIError):
        message = exc.message
        errors = exc.errors
    elif isinstance(exc, exceptions.ValidationError):
        message = "Validation Error"
        errors = _flatten(exc.detail, _location(context))
    elif isinstance(response.data, dict) and "detail" in response.data:
        message = str(response.data["detail"])
    else:
        message = str(exc)

    body = {"message": message, "status": response.status_code}
    if errors:
        body["errors"] = errors
    response.data = body

    if response.status_code >= 500:
        logger.error(f"Server error response: {message}")
    return response
