"""Land and land-commodity routers. Every endpoint needs a token."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, get_cache
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.response import DataResponse, ListResponse
from superfarmer.db.base import get_db
from superfarmer.routers.v1.deps import CurrentUser, add_lifecycle_routes, get_current_user
from superfarmer.schemas.land import (
    LandCommodityCreate,
    LandCommodityOut,
    LandCommodityUpdate,
    LandCreate,
    LandOut,
    LandUpdate,
)
from superfarmer.services.land import LandCommodityService, LandService

lands_router = APIRouter(prefix="/lands", tags=["Lands"])
land_commodities_router = APIRouter(prefix="/land_commodities", tags=["Lands"])

add_lifecycle_routes(lands_router, LandService, LandOut)
add_lifecycle_routes(land_commodities_router, LandCommodityService, LandCommodityOut)


# ------------------------------------------------------------------
# Lands
# ------------------------------------------------------------------

@lands_router.post("", response_model=DataResponse[LandOut], status_code=status.HTTP_201_CREATED)
async def create_land(
    body: LandCreate,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Register a land owned by the caller."""
    land = await LandService(session).create(body, user_id=user.id)
    return {"data": LandOut.model_validate(land)}


@lands_router.get("", response_model=ListResponse[LandOut])
async def list_lands(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await LandService(session).list(pagination)


@lands_router.get("/user/{user_id}", response_model=ListResponse[LandOut])
async def list_lands_by_user(
    user_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await LandService(session).list_by(pagination, user_id=user_id)


@lands_router.get("/{land_id}", response_model=DataResponse[LandOut])
async def get_land(
    land_id: str,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    land = await LandService(session).get(land_id)
    return {"data": LandOut.model_validate(land)}


@lands_router.patch("/{land_id}", response_model=DataResponse[LandOut])
async def update_land(
    land_id: str,
    body: LandUpdate,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    svc = LandService(session)
    await svc.ensure_owner(land_id, user.id, user.is_admin)
    land = await svc.update(land_id, body)
    return {"data": LandOut.model_validate(land)}


# ------------------------------------------------------------------
# Land commodities
# ------------------------------------------------------------------

@land_commodities_router.post(
    "", response_model=DataResponse[LandCommodityOut], status_code=status.HTTP_201_CREATED
)
async def create_land_commodity(
    body: LandCommodityCreate,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Plant a commodity on part of a land. Rejected when the land has no free area left."""
    land_commodity = await LandCommodityService(session).create(body)
    return {"data": LandCommodityOut.model_validate(land_commodity)}


@land_commodities_router.get("", response_model=ListResponse[LandCommodityOut])
async def list_land_commodities(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await LandCommodityService(session).list(pagination)


@land_commodities_router.get("/land/{land_id}", response_model=ListResponse[LandCommodityOut])
async def list_land_commodities_by_land(
    land_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await LandCommodityService(session).list_by(pagination, land_id=land_id)


@land_commodities_router.get(
    "/commodity/{commodity_id}", response_model=ListResponse[LandCommodityOut]
)
async def list_land_commodities_by_commodity(
    commodity_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await LandCommodityService(session).list_by(pagination, commodity_id=commodity_id)


@land_commodities_router.get("/{land_commodity_id}", response_model=DataResponse[LandCommodityOut])
async def get_land_commodity(
    land_commodity_id: str,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    land_commodity = await LandCommodityService(session).get(land_commodity_id)
    return {"data": LandCommodityOut.model_validate(land_commodity)}


@land_commodities_router.patch(
    "/{land_commodity_id}", response_model=DataResponse[LandCommodityOut]
)
async def update_land_commodity(
    land_commodity_id: str,
    body: LandCommodityUpdate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    land_commodity = await LandCommodityService(session, cache).update(land_commodity_id, body)
    return {"data": LandCommodityOut.model_validate(land_commodity)}
