"""Generic async repository with soft-delete, restore and pagination."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.pagination import PaginationParams
from superfarmer.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def day_start(value) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def day_end(value) -> datetime:
    """Last second of the given day, so date windows include the whole end day."""
    return day_start(value) + timedelta(days=1) - timedelta(seconds=1)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Soft-deletes: rows with `deleted_at IS NOT NULL` are excluded from all
    standard reads and only reachable through the `*_deleted` methods and
    `restore`. Hard-delete is intentionally never exposed.
    """

    model: type[ModelT]
    # Column the `?name=` filter matches against; None disables it
    search_column: str | None = "name"

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self, *, deleted: bool = False):
        """Return a SELECT over live rows, or over soft-deleted rows only."""
        q = select(self.model)
        if deleted:
            return q.where(self.model.deleted_at.is_not(None))
        return q.where(self.model.deleted_at.is_(None))

    def _apply_filters(self, q, pagination: PaginationParams, filters: dict[str, Any] | None):
        if filters:
            for col_name, value in filters.items():
                if value is not None and col_name in self.model.__table__.columns:
                    q = q.where(getattr(self.model, col_name) == value)

        if pagination.name and self.search_column:
            col = getattr(self.model, self.search_column)
            q = q.where(func.lower(col).contains(pagination.name.lower(), autoescape=True))
        if pagination.start_date:
            q = q.where(self.model.created_at >= day_start(pagination.start_date))
        if pagination.end_date:
            q = q.where(self.model.created_at <= day_end(pagination.end_date))
        return q

    async def _paginate(
        self, q, pagination: PaginationParams, filters: dict[str, Any] | None = None
    ) -> tuple[list[ModelT], int]:
        q = self._apply_filters(q, pagination, filters)

        # Count
        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        # Order + paginate; unknown sort fields fall back to created_at
        sort = pagination.sort if pagination.sort in self.model.__table__.columns else "created_at"
        col = getattr(self.model, sort)
        q = q.order_by(col.desc() if pagination.order == "desc" else col.asc())
        q = q.offset(pagination.offset).limit(pagination.limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: Any) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def get_deleted_by_id(self, entity_id: Any) -> ModelT | None:
        result = await self._session.execute(
            self._base_query(deleted=True).where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def find_one(self, *, include_deleted: bool = False, **filters: Any) -> ModelT | None:
        """First row matching every equality filter."""
        q = select(self.model) if include_deleted else self._base_query()
        for col_name, value in filters.items():
            q = q.where(getattr(self.model, col_name) == value)
        result = await self._session.execute(q.limit(1))
        return result.scalars().first()

    async def list(
        self, pagination: PaginationParams, filters: dict[str, Any] | None = None
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) of live rows."""
        return await self._paginate(self._base_query(), pagination, filters)

    async def list_deleted(
        self, pagination: PaginationParams
    ) -> tuple[list[ModelT], int]:
        return await self._paginate(self._base_query(deleted=True), pagination)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: Any, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        if "updated_at" not in kwargs:
            kwargs["updated_at"] = datetime.now(timezone.utc)

        await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.deleted_at.is_(None))
            .values(**kwargs)
        )
        await self._session.flush()
        return await self.get_by_id(entity_id)

    async def soft_delete(self, entity_id: Any) -> bool:
        result = await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
        )
        await self._session.flush()
        return result.rowcount > 0

    async def restore(self, entity_id: Any) -> bool:
        result = await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.deleted_at.is_not(None))
            .values(deleted_at=None, updated_at=datetime.now(timezone.utc))
        )
        await self._session.flush()
        return result.rowcount > 0
