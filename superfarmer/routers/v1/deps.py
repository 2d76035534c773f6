"""Shared router dependencies: authentication, role checks, lifecycle routes."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, get_cache
from superfarmer.core.exceptions import ForbiddenError, UnauthorizedError
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.response import DataResponse, ListResponse
from superfarmer.core.security import decode_access_token
from superfarmer.db.base import get_db
from superfarmer.domain.role import ADMIN_ROLE_ID
from superfarmer.repositories.identity import UserRepository

_bearer = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    id: str
    role_id: int

    @property
    def is_admin(self) -> bool:
        return self.role_id == ADMIN_ROLE_ID


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    session: AsyncSession = Depends(get_db),
) -> CurrentUser:
    if credentials is None:
        raise UnauthorizedError()
    claims = decode_access_token(credentials.credentials)
    user = await UserRepository(session).get_by_id(claims["sub"])
    if user is None:
        raise UnauthorizedError("User no longer exists")
    return CurrentUser(id=user.id, role_id=user.role_id)


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin role required")
    return user


def add_lifecycle_routes(
    router: APIRouter,
    service_cls: type,
    out_schema: type,
    id_type: type = str,
    guard: Callable[..., Any] = get_current_user,
) -> None:
    """Register the soft-delete endpoints every entity exposes.

    Must be called before the router declares `/{id}` so that `/deleted`
    is matched first.
    """

    @router.get("/deleted", response_model=ListResponse[out_schema])
    async def list_deleted(
        pagination: PaginationParams = Depends(),
        session: AsyncSession = Depends(get_db),
        cache: Cache = Depends(get_cache),
        _: CurrentUser = Depends(guard),
    ):
        return await service_cls(session, cache).list_deleted(pagination)

    @router.get("/deleted/{entity_id}", response_model=DataResponse[out_schema])
    async def get_deleted(
        entity_id: id_type,
        session: AsyncSession = Depends(get_db),
        cache: Cache = Depends(get_cache),
        _: CurrentUser = Depends(guard),
    ):
        found = await service_cls(session, cache).get_deleted(entity_id)
        return {"data": out_schema.model_validate(found)}

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete(
        entity_id: id_type,
        session: AsyncSession = Depends(get_db),
        cache: Cache = Depends(get_cache),
        _: CurrentUser = Depends(guard),
    ):
        await service_cls(session, cache).delete(entity_id)

    @router.patch("/{entity_id}/restore", response_model=DataResponse[out_schema])
    async def restore(
        entity_id: id_type,
        session: AsyncSession = Depends(get_db),
        cache: Cache = Depends(get_cache),
        _: CurrentUser = Depends(guard),
    ):
        restored = await service_cls(session, cache).restore(entity_id)
        return {"data": out_schema.model_validate(restored)}
