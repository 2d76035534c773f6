from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, get_cache
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.response import DataResponse, ListResponse
from superfarmer.db.base import get_db
from superfarmer.routers.v1.deps import (
    CurrentUser,
    add_lifecycle_routes,
    get_current_user,
    require_admin,
)
from superfarmer.schemas.commodity import CommodityCreate, CommodityOut, CommodityUpdate
from superfarmer.services.commodity import CommodityService

router = APIRouter(prefix="/commodities", tags=["Commodities"])

add_lifecycle_routes(router, CommodityService, CommodityOut, guard=require_admin)


@router.post("", response_model=DataResponse[CommodityOut], status_code=status.HTTP_201_CREATED)
async def create_commodity(
    body: CommodityCreate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(require_admin),
):
    commodity = await CommodityService(session, cache).create(body)
    return {"data": CommodityOut.model_validate(commodity)}


@router.get("", response_model=ListResponse[CommodityOut])
async def list_commodities(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    """List commodities (paginated, cached). Filter by ?name=."""
    return await CommodityService(session, cache).list(pagination)


@router.get("/{commodity_id}", response_model=DataResponse[CommodityOut])
async def get_commodity(
    commodity_id: str,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    commodity = await CommodityService(session, cache).get(commodity_id)
    return {"data": CommodityOut.model_validate(commodity)}


@router.patch("/{commodity_id}", response_model=DataResponse[CommodityOut])
async def update_commodity(
    commodity_id: str,
    body: CommodityUpdate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(require_admin),
):
    commodity = await CommodityService(session, cache).update(commodity_id, body)
    return {"data": CommodityOut.model_validate(commodity)}
