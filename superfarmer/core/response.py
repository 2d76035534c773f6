"""Standardized JSON response envelope helpers."""


import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from superfarmer.core.pagination import PageMeta, PaginationParams

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ data: {...} }`"""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ListResponse(BaseModel, Generic[T]):
    """Paginated list response envelope: `{ data: [...], meta: {...} }`"""

    data: list[T]
    meta: PageMeta

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ReportQueued(BaseModel):
    """Returned when a report request has been handed to the worker."""

    message: str
    download_url: str

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def page_meta(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 1,
    }


def paginated(items: list[Any], total: int, pagination: PaginationParams) -> dict:
    """Build a paginated response dict for use with ListResponse."""
    return {"data": items, "meta": page_meta(total, pagination.page, pagination.limit)}
