"""
Pagination helpers shared by list endpoints.

Every listing accepts ``page`` (1-based) and ``perPage`` query parameters and
answers ``{"data": [...], "totals": N}`` plus any endpoint-specific extras.
"""

from django.conf import settings
from rest_framework import serializers


class PaginationQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    perPage = serializers.IntegerField(required=False, min_value=1, max_value=settings.PAGINATION_MAX_PER_PAGE)


def pagination_params(request):
    """Return ``(page, per_page)`` from the query string, rejecting bad values."""
    serializer = PaginationQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    return data["page"], data.get("perPage") or settings.PAGINATION_DEFAULT_PER_PAGE


def filter_params(request, *names):
    """Pick the listed filter names out of the query string."""
    return {name: request.query_params[name] for name in names if name in request.query_params}


def page_payload(result, serializer_class, context=None):
    payload = {
        "data": serializer_class(result.items, many=True, context=context or {}).data,
        "totals": result.total_count,
    }
    payload.update(result.extra)
    return payload
