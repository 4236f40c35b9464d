"""
Shared service-layer foundation.

Services in each app subclass ``BaseService`` for a class-named logger and
the ``log_performance`` timing decorator. Expected failures are raised as the
``utils.exceptions`` taxonomy and rendered by the API exception handler;
services never return error values.
"""

import logging
import time
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator

from .exceptions import ValidationError


@dataclass
class PageResult:
    """One page of a sorted, filtered listing."""

    items: List[Any]
    total_count: int
    page: int
    per_page: int
    extra: Dict[str, Any] = field(default_factory=dict)


def paginate(queryset, page: int = 1, per_page: Optional[int] = None) -> PageResult:
    """
    Slice an ordered queryset into a page.

    Pages past the end are empty rather than clamped to the last page.
    """
    per_page = per_page or settings.PAGINATION_DEFAULT_PER_PAGE
    paginator = Paginator(queryset, per_page)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []
    return PageResult(items=items, total_count=paginator.count, page=page, per_page=per_page)


def apply_filterset(filterset_class, filters, queryset):
    """
    Run ``filters`` through a django-filter FilterSet.

    Raises:
        ValidationError: a filter value could not be parsed
    """
    filterset = filterset_class(filters or {}, queryset=queryset)
    if not filterset.is_valid():
        errors = [
            {"field": name, "location": "query", "messages": [str(m) for m in messages]}
            for name, messages in filterset.errors.items()
        ]
        raise ValidationError(errors=errors)
    return filterset.qs


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class CatalogService(BaseService):
            @BaseService.log_performance
            def list_products(self, filters):
                self.logger.info(f"Listing products with filters: {filters}")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log execution time of service methods.

        Exceptions are logged with their elapsed time and re-raised; taxonomy
        errors (4xx) are logged at info, anything else at error with traceback.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # ms
                self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")
                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                status_code = getattr(e, "status_code", 500)
                if status_code < 500:
                    self.logger.info(f"{method_name} rejected with {status_code} after {elapsed_time:.2f}ms: {e}")
                else:
                    self.logger.error(
                        f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                        exc_info=True,
                    )
                raise

        return wrapper
