"""Offset/limit pagination for SQLAlchemy select statements."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.engine import Connection, Result, RowMapping
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession
from sqlalchemy.orm import Session

from sqlpaginate.config import get_settings
from sqlpaginate.exceptions import ValidationError
from sqlpaginate.schemas import camelize_keys

logger = logging.getLogger(__name__)

T = TypeVar("T")

PostProcessor = Callable[[dict[str, Any]], dict[str, Any]]
Executor = Session | Connection
AsyncExecutor = AsyncSession | AsyncConnection

COUNT_SUBQUERY_NAME = "count__query__"


@dataclass
class Page(Generic[T]):
    """A page of rows plus its pagination metadata."""

    data: list[T]
    pagination: dict[str, Any]


@dataclass(frozen=True)
class PagePlan:
    """Validated pagination parameters and the slice they resolve to."""

    per_page: int
    current_page: int
    offset: int
    limit: int
    fetch_totals: bool


def _to_int(value: Any, name: str) -> int:
    message = f"Paginate error: {name} must be a number."
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        return value
    try:
        number = Decimal(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, ArithmeticError):
        raise ValidationError(message) from None
    if not number.is_finite():
        raise ValidationError(message)
    return int(number)


def _check_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"Paginate error: {name} must be a boolean.")
    return value


def plan_page(
    per_page: Any = None,
    current_page: Any = 1,
    is_from_start: Any = False,
    is_length_aware: Any = False,
) -> PagePlan:
    """
    Validate pagination options and compute the slice to fetch.

    Checks run in a fixed order and the first failure is raised:
    per_page, current_page, is_from_start, is_length_aware.

    Args:
        per_page: Rows per page (defaults to the configured default_per_page)
        current_page: Requested page (defaults to 1), clamped to 1 when lower
        is_from_start: Return every row from the first up to the end of the page
        is_length_aware: Fetch totals even when not on the first page

    Returns:
        PagePlan with offset, limit and whether totals are needed

    Raises:
        ValidationError: If any option has the wrong type
    """
    if per_page is None:
        per_page = get_settings().default_per_page
    per_page = _to_int(per_page, "per_page")
    if per_page < 1:
        raise ValidationError("Paginate error: per_page must be a positive number.")
    if current_page is None:
        current_page = 1
    current_page = max(_to_int(current_page, "current_page"), 1)
    _check_bool(is_from_start, "is_from_start")
    _check_bool(is_length_aware, "is_length_aware")

    if is_from_start:
        offset, limit = 0, per_page * current_page
    else:
        offset, limit = (current_page - 1) * per_page, per_page

    return PagePlan(
        per_page=per_page,
        current_page=current_page,
        offset=offset,
        limit=limit,
        fetch_totals=is_length_aware or current_page == 1 or is_from_start,
    )


def build_count_query(query: Select) -> Select:
    """
    Build a query counting the rows the given select would return.

    The select is wrapped as a derived table so WHERE, JOIN and GROUP BY
    all apply; a grouped select counts its groups. Offset and ordering are
    dropped, any limit is kept.
    """
    counted = query.offset(None).order_by(None).subquery(COUNT_SUBQUERY_NAME)
    return select(func.count().label("total")).select_from(counted)


def _rows(result: Result) -> list[Any]:
    # A single column or ORM entity comes back as plain values
    if len(result.keys()) == 1:
        return list(result.scalars().all())
    return list(result.all())


def _read_total(row: RowMapping | None) -> int:
    if row is None:
        return 0
    value = row.get("total")
    if value is None:
        value = row.get("TOTAL")  # drivers that upper-case labels
    return int(value or 0)


def _post_processor(post_process_response: PostProcessor | None) -> PostProcessor:
    if post_process_response is not None:
        return post_process_response
    if get_settings().key_style == "camel":
        return camelize_keys
    return dict


def _build_page(
    plan: PagePlan,
    rows: list[Any],
    total: int | None,
    post_process_response: PostProcessor | None,
) -> Page:
    pagination: dict[str, Any] = {}
    if total is not None:
        last_page = math.ceil(total / plan.per_page)
        pagination = {
            "total": total,
            "last_page": last_page,
            "prev_page": plan.current_page - 1 if plan.current_page > 1 else None,
            "next_page": plan.current_page + 1 if plan.current_page < last_page else None,
        }

    pagination.update(
        {
            "per_page": plan.per_page,
            "current_page": plan.current_page,
            "from": plan.offset,
            "to": plan.offset + len(rows),
        }
    )
    return Page(data=rows, pagination=_post_processor(post_process_response)(pagination))


def _prepare(
    query: Select,
    per_page: Any,
    current_page: Any,
    is_from_start: Any,
    is_length_aware: Any,
) -> tuple[PagePlan, Select, Select | None]:
    plan = plan_page(per_page, current_page, is_from_start, is_length_aware)
    logger.debug(
        f"Paginating page {plan.current_page} "
        f"(offset={plan.offset}, limit={plan.limit}, totals={plan.fetch_totals})"
    )
    count_query = build_count_query(query) if plan.fetch_totals else None
    if count_query is not None:
        logger.debug(f"Count query: {count_query}")
    return plan, query.offset(plan.offset).limit(plan.limit), count_query


def paginate(
    session: Executor | None,
    query: Select,
    *,
    per_page: Any = None,
    current_page: Any = 1,
    is_from_start: Any = False,
    is_length_aware: Any = False,
    transaction: Executor | None = None,
    post_process_response: PostProcessor | None = None,
) -> Page:
    """
    Fetch one page of a select statement along with pagination metadata.

    Totals (total, last_page, prev_page, next_page) are only queried when
    is_length_aware is set, on the first page, or in from-start mode.

    Args:
        session: Session or Connection used to run the queries
        query: Select to paginate; any existing offset and limit are replaced
        per_page: Rows per page
        current_page: Page number (1-indexed)
        is_from_start: Return rows from the start through the requested page
        is_length_aware: Always fetch totals
        transaction: Session or Connection in an open transaction; when given
            both the page and the count query run on it instead of session
        post_process_response: Mapping applied to the pagination dict

    Returns:
        Page with the fetched rows and the pagination dict
    """
    plan, page_query, count_query = _prepare(
        query, per_page, current_page, is_from_start, is_length_aware
    )
    executor = transaction if transaction is not None else session

    rows = _rows(executor.execute(page_query))
    total = None
    if count_query is not None:
        total = _read_total(executor.execute(count_query).mappings().first())

    return _build_page(plan, rows, total, post_process_response)


async def paginate_async(
    session: AsyncExecutor | None,
    query: Select,
    *,
    per_page: Any = None,
    current_page: Any = 1,
    is_from_start: Any = False,
    is_length_aware: Any = False,
    transaction: AsyncExecutor | None = None,
    post_process_response: PostProcessor | None = None,
) -> Page:
    """Async version of paginate() for AsyncSession and AsyncConnection."""
    plan, page_query, count_query = _prepare(
        query, per_page, current_page, is_from_start, is_length_aware
    )
    executor = transaction if transaction is not None else session

    rows = _rows(await executor.execute(page_query))
    total = None
    if count_query is not None:
        result = await executor.execute(count_query)
        total = _read_total(result.mappings().first())

    return _build_page(plan, rows, total, post_process_response)


class Paginator:
    """
    A select statement bound to a response post-processor.

    Usage:
        people = Paginator(select(Person).where(Person.active), camelize_keys)
        page = people.paginate(db, per_page=20, current_page=3)
    """

    def __init__(self, query: Select, post_process_response: PostProcessor | None = None):
        self.query = query
        self.post_process_response = post_process_response

    def paginate(self, session: Executor | None, **options: Any) -> Page:
        options.setdefault("post_process_response", self.post_process_response)
        return paginate(session, self.query, **options)

    async def paginate_async(self, session: AsyncExecutor | None, **options: Any) -> Page:
        options.setdefault("post_process_response", self.post_process_response)
        return await paginate_async(session, self.query, **options)

    def __repr__(self) -> str:
        return f"<Paginator {self.query!r}>"
