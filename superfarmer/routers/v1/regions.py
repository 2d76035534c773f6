"""Province and city routers. Reads need a token, writes need the Admin role."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.pagination import PaginationParams
from superfarmer.core.response import DataResponse, ListResponse
from superfarmer.db.base import get_db
from superfarmer.routers.v1.deps import (
    CurrentUser,
    add_lifecycle_routes,
    get_current_user,
    require_admin,
)
from superfarmer.schemas.region import (
    CityCreate,
    CityOut,
    CityUpdate,
    ProvinceCreate,
    ProvinceOut,
    ProvinceUpdate,
)
from superfarmer.services.region import CityService, ProvinceService

provinces_router = APIRouter(prefix="/provinces", tags=["Regions"])
cities_router = APIRouter(prefix="/cities", tags=["Regions"])

add_lifecycle_routes(provinces_router, ProvinceService, ProvinceOut, id_type=int, guard=require_admin)
add_lifecycle_routes(cities_router, CityService, CityOut, id_type=int, guard=require_admin)


# ------------------------------------------------------------------
# Provinces
# ------------------------------------------------------------------

@provinces_router.post("", response_model=DataResponse[ProvinceOut], status_code=status.HTTP_201_CREATED)
async def create_province(
    body: ProvinceCreate,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    province = await ProvinceService(session).create(body)
    return {"data": ProvinceOut.model_validate(province)}


@provinces_router.get("", response_model=ListResponse[ProvinceOut])
async def list_provinces(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await ProvinceService(session).list(pagination)


@provinces_router.get("/{province_id}", response_model=DataResponse[ProvinceOut])
async def get_province(
    province_id: int,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    province = await ProvinceService(session).get(province_id)
    return {"data": ProvinceOut.model_validate(province)}


@provinces_router.patch("/{province_id}", response_model=DataResponse[ProvinceOut])
async def update_province(
    province_id: int,
    body: ProvinceUpdate,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    province = await ProvinceService(session).update(province_id, body)
    return {"data": ProvinceOut.model_validate(province)}


# ------------------------------------------------------------------
# Cities
# ------------------------------------------------------------------

@cities_router.post("", response_model=DataResponse[CityOut], status_code=status.HTTP_201_CREATED)
async def create_city(
    body: CityCreate,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    city = await CityService(session).create(body)
    return {"data": CityOut.model_validate(city)}


@cities_router.get("", response_model=ListResponse[CityOut])
async def list_cities(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await CityService(session).list(pagination)


@cities_router.get("/province/{province_id}", response_model=ListResponse[CityOut])
async def list_cities_by_province(
    province_id: int,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await CityService(session).list_by(pagination, province_id=province_id)


@cities_router.get("/{city_id}", response_model=DataResponse[CityOut])
async def get_city(
    city_id: int,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    city = await CityService(session).get(city_id)
    return {"data": CityOut.model_validate(city)}


@cities_router.patch("/{city_id}", response_model=DataResponse[CityOut])
async def update_city(
    city_id: int,
    body: CityUpdate,
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    city = await CityService(session).update(city_id, body)
    return {"data": CityOut.model_validate(city)}
