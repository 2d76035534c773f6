"""User and role routers.

Registration is public; listing users and managing roles is admin-only.
Users may read and edit their own record.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, get_cache
from superfarmer.core.exceptions import ForbiddenError
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.response import DataResponse, ListResponse
from superfarmer.db.base import get_db
from superfarmer.routers.v1.deps import (
    CurrentUser,
    add_lifecycle_routes,
    get_current_user,
    require_admin,
)
from superfarmer.schemas.identity import RoleCreate, RoleOut, UserCreate, UserOut, UserUpdate
from superfarmer.services.identity import RoleService, UserService

router = APIRouter(prefix="/users", tags=["Users"])
roles_router = APIRouter(prefix="/roles", tags=["Roles"])

add_lifecycle_routes(router, UserService, UserOut, guard=require_admin)


def _self_or_admin(user: CurrentUser, user_id: str) -> None:
    if user.id != user_id and not user.is_admin:
        raise ForbiddenError("You can only access your own account")


@router.post("", response_model=DataResponse[UserOut], status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserCreate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
):
    """Register a new farmer account."""
    user = await UserService(session, cache).create(body)
    return {"data": UserOut.model_validate(user)}


@router.get("", response_model=ListResponse[UserOut])
async def list_users(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(require_admin),
):
    return await UserService(session, cache).list(pagination)


@router.get("/{user_id}", response_model=DataResponse[UserOut])
async def get_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current: CurrentUser = Depends(get_current_user),
):
    _self_or_admin(current, user_id)
    user = await UserService(session, cache).get(user_id)
    return {"data": UserOut.model_validate(user)}


@router.patch("/{user_id}", response_model=DataResponse[UserOut])
async def update_user(
    user_id: str,
    body: UserUpdate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current: CurrentUser = Depends(get_current_user),
):
    _self_or_admin(current, user_id)
    user = await UserService(session, cache).update(user_id, body)
    return {"data": UserOut.model_validate(user)}


@roles_router.post("", response_model=DataResponse[RoleOut], status_code=status.HTTP_201_CREATED)
async def create_role(
    body: RoleCreate,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    role = await RoleService(session).create(body)
    return {"data": RoleOut.model_validate(role)}


@roles_router.get("", response_model=ListResponse[RoleOut])
async def list_roles(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    return await RoleService(session).list(pagination)
