"""Offset/limit pagination with totals for SQLAlchemy select statements."""

from sqlpaginate.exceptions import PaginationError, ValidationError
from sqlpaginate.pagination import (
    Page,
    PagePlan,
    Paginator,
    build_count_query,
    paginate,
    paginate_async,
    plan_page,
)
from sqlpaginate.schemas import PageResponse, PaginationMeta, PaginationOptions, camelize_keys

__all__ = [
    "Page",
    "PagePlan",
    "Paginator",
    "PageResponse",
    "PaginationError",
    "PaginationMeta",
    "PaginationOptions",
    "ValidationError",
    "build_count_query",
    "camelize_keys",
    "paginate",
    "paginate_async",
    "plan_page",
]
