"""Pydantic schemas for pagination options and responses."""

from typing import Any, Generic, TypeVar

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from sqlpaginate.config import get_settings

T = TypeVar("T")


def camelize_keys(pagination: dict[str, Any]) -> dict[str, Any]:
    """Rename pagination keys to camelCase (per_page -> perPage)."""
    return {to_camel(key): value for key, value in pagination.items()}


class PaginationOptions(BaseModel):
    """Options accepted by paginate(), as parsed from a request."""

    per_page: int = Field(default_factory=lambda: get_settings().default_per_page)
    current_page: int = 1
    is_from_start: bool = False
    is_length_aware: bool = False


class PaginationMeta(BaseModel):
    """
    Pagination metadata for a page of results.

    Accepts snake_case or camelCase keys, so it can be built from a Page in
    either key style. Serializes in the configured key_style.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
    )

    total: int | None = Field(None, description="Only set when totals were fetched")
    last_page: int | None = None
    prev_page: int | None = None
    next_page: int | None = None
    per_page: int
    current_page: int
    from_: int = Field(..., validation_alias="from", serialization_alias="from")
    to: int

    @model_serializer(mode="wrap")
    def _serialize_in_key_style(self, handler):
        data = handler(self)
        if get_settings().key_style == "camel":
            return camelize_keys(data)
        return data


class PageResponse(BaseModel, Generic[T]):
    """Schema for a paginated list response."""

    data: list[T]
    pagination: PaginationMeta
