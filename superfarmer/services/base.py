"""Generic CRUD service — the pattern every entity service builds on.

Subclasses set `entity`, `repository_cls` and `out_schema`, and override
`create` / `update` to add their business rules. Setting `cache_namespace`
routes list reads through the Redis cache; every write clears that namespace
once the request commits.

Rule: No queries / no FastAPI here. Repositories own the SQL.
"""

from __future__ import annotations

from typing import Any, Generic

from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, invalidate_on_commit
from superfarmer.core.exceptions import NotFoundError
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.response import paginated
from superfarmer.repositories.base import BaseRepository, ModelT
from superfarmer.schemas.common import CamelModel


class CrudService(Generic[ModelT]):
    entity: str
    repository_cls: type[BaseRepository]
    out_schema: type[CamelModel]
    cache_namespace: str | None = None
    # Other cached namespaces whose reads join this entity
    dependent_namespaces: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession, cache: Cache | None = None):
        self._session = session
        self._repo = self.repository_cls(session)
        self._cache = cache

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _dump(self, items: list[ModelT]) -> list[dict[str, Any]]:
        return [self.out_schema.model_validate(i).model_dump(mode="json") for i in items]

    async def _page(
        self,
        pagination: PaginationParams,
        filters: dict[str, Any] | None = None,
        cache_key: str | None = None,
    ) -> dict:
        async def load() -> dict:
            items, total = await self._repo.list(pagination, filters)
            return paginated(self._dump(items), total, pagination)

        if self._cache is None or self.cache_namespace is None:
            return await load()

        key = f"{self.cache_namespace}:list:{cache_key or 'all'}:{pagination.cache_key()}"
        return await self._cache.get_or_set(key, load)

    def _invalidate(self) -> None:
        """Queue this service's namespaces for clearing when the session commits."""
        if self._cache is None:
            return
        namespaces = (self.cache_namespace,) if self.cache_namespace else ()
        for namespace in namespaces + self.dependent_namespaces:
            invalidate_on_commit(self._session, self._cache, namespace)

    async def _require(self, repo_cls: type[BaseRepository], entity: str, entity_id: Any):
        """Load a live row from another repository or raise 404."""
        found = await repo_cls(self._session).get_by_id(entity_id)
        if found is None:
            raise NotFoundError(entity, entity_id)
        return found

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list(self, pagination: PaginationParams) -> dict:
        return await self._page(pagination)

    async def list_by(self, pagination: PaginationParams, **filters: Any) -> dict:
        key = ":".join(f"{k}={v}" for k, v in sorted(filters.items()))
        return await self._page(pagination, filters, cache_key=key)

    async def list_deleted(self, pagination: PaginationParams) -> dict:
        items, total = await self._repo.list_deleted(pagination)
        return paginated(self._dump(items), total, pagination)

    async def get(self, entity_id: Any) -> ModelT:
        found = await self._repo.get_by_id(entity_id)
        if not found:
            raise NotFoundError(self.entity, entity_id)
        return found

    async def get_deleted(self, entity_id: Any) -> ModelT:
        found = await self._repo.get_deleted_by_id(entity_id)
        if not found:
            raise NotFoundError(f"Deleted {self.entity.lower()}", entity_id)
        return found

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, data: CamelModel, **extra: Any) -> ModelT:
        created = await self._repo.create(**data.model_dump(exclude_none=True), **extra)
        self._invalidate()
        return created

    async def update(self, entity_id: Any, data: CamelModel) -> ModelT:
        _ = await self.get(entity_id)  # raises 404 if missing
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        updated = await self._repo.update(entity_id, **changes)
        self._invalidate()
        return updated  # type: ignore[return-value]

    async def delete(self, entity_id: Any) -> None:
        deleted = await self._repo.soft_delete(entity_id)
        if not deleted:
            raise NotFoundError(self.entity, entity_id)
        self._invalidate()

    async def restore(self, entity_id: Any) -> ModelT:
        restored = await self._repo.restore(entity_id)
        if not restored:
            raise NotFoundError(f"Deleted {self.entity.lower()}", entity_id)
        self._invalidate()
        return await self.get(entity_id)
