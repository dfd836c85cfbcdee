"""FastAPI dependencies for paginated endpoints."""

from fastapi import Query

from sqlpaginate.config import get_settings
from sqlpaginate.schemas import PaginationOptions

settings = get_settings()


async def get_pagination_options(
    per_page: int = Query(settings.default_per_page, ge=1, le=settings.max_per_page),
    current_page: int = Query(1),
    is_from_start: bool = Query(False),
    is_length_aware: bool = Query(False),
) -> PaginationOptions:
    """
    Read pagination options from the query string.

    current_page has no lower bound here; paginate() clamps it to 1.

    Use as a FastAPI dependency:
        @router.get("/people")
        def list_people(
            options: PaginationOptions = Depends(get_pagination_options),
            db: Session = Depends(get_db),
        ):
            return paginate(db, select(Person), **options.model_dump())
    """
    return PaginationOptions(
        per_page=per_page,
        current_page=current_page,
        is_from_start=is_from_start,
        is_length_aware=is_length_aware,
    )
