"""Pagination helpers for list endpoints."""

from datetime import date
from typing import Optional

from fastapi import Query
from pydantic import BaseModel


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=10&sort=created_at&order=desc`.

    Optional filters: `name` (case-insensitive substring on the entity's
    search column) and an inclusive `start_date` / `end_date` window on
    `created_at`.
    """

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(default=10, ge=1, le=100, description="Items per page"),
        sort: str = Query(default="created_at", description="Sort field"),
        order: str = Query(default="desc", pattern="^(asc|desc)$", description="Sort order"),
        name: Optional[str] = Query(default=None, description="Filter by name"),
        start_date: Optional[date] = Query(default=None, description="Created on or after"),
        end_date: Optional[date] = Query(default=None, description="Created on or before"),
    ):
        self.page = page
        self.limit = limit
        self.sort = sort
        self.order = order
        self.name = name
        self.start_date = start_date
        self.end_date = end_date

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def cache_key(self) -> str:
        """Stable key fragment covering every param that changes the result."""
        return ":".join(
            str(part) if part is not None else "-"
            for part in (
                self.page, self.limit, self.sort, self.order,
                self.name, self.start_date, self.end_date,
            )
        )


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    model_config = {"populate_by_name": True}
