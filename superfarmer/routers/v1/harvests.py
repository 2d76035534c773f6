"""Harvest and sale routers. Every endpoint needs a token."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, get_cache
from superfarmer.core.exceptions import ValidationError
from superfarmer.core.messaging import Publisher, get_publisher
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.reports import XLSX_MEDIA_TYPE
from superfarmer.core.response import DataResponse, ListResponse, ReportQueued
from superfarmer.db.base import get_db
from superfarmer.routers.v1.deps import CurrentUser, add_lifecycle_routes, get_current_user
from superfarmer.schemas.harvest import (
    HarvestCreate,
    HarvestOut,
    HarvestUpdate,
    SaleCreate,
    SaleOut,
    SaleUpdate,
)
from superfarmer.services.harvest import HarvestService, SaleService

harvests_router = APIRouter(prefix="/harvests", tags=["Harvests"])
sales_router = APIRouter(prefix="/sales", tags=["Sales"])

add_lifecycle_routes(harvests_router, HarvestService, HarvestOut)
add_lifecycle_routes(sales_router, SaleService, SaleOut)


# ------------------------------------------------------------------
# Harvests
# ------------------------------------------------------------------

@harvests_router.post("", response_model=DataResponse[HarvestOut], status_code=status.HTTP_201_CREATED)
async def create_harvest(
    body: HarvestCreate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    harvest = await HarvestService(session, cache).create(body)
    return {"data": HarvestOut.model_validate(harvest)}


@harvests_router.get("", response_model=ListResponse[HarvestOut])
async def list_harvests(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await HarvestService(session, cache).list(pagination)


@harvests_router.get("/commodity/{commodity_id}", response_model=ListResponse[HarvestOut])
async def list_harvests_by_commodity(
    commodity_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await HarvestService(session, cache).list_by_land_commodity_field(
        pagination, "commodity_id", commodity_id
    )


@harvests_router.get("/land/{land_id}", response_model=ListResponse[HarvestOut])
async def list_harvests_by_land(
    land_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await HarvestService(session, cache).list_by_land_commodity_field(
        pagination, "land_id", land_id
    )


@harvests_router.get(
    "/land_commodity/{land_commodity_id}", response_model=ListResponse[HarvestOut]
)
async def list_harvests_by_land_commodity(
    land_commodity_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await HarvestService(session, cache).list_by(
        pagination, land_commodity_id=land_commodity_id
    )


@harvests_router.get("/city/{city_id}", response_model=ListResponse[HarvestOut])
async def list_harvests_by_city(
    city_id: int,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await HarvestService(session, cache).list_by(pagination, city_id=city_id)


@harvests_router.get(
    "/land_commodity/{land_commodity_id}/download",
    response_model=DataResponse[ReportQueued],
    status_code=status.HTTP_202_ACCEPTED,
)
async def request_harvest_report(
    land_commodity_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    session: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher),
    _: CurrentUser = Depends(get_current_user),
):
    """Queue an Excel harvest report; poll `downloadUrl` for the file."""
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    url = await HarvestService(session).request_report(
        publisher, land_commodity_id, start_date, end_date
    )
    return {"data": ReportQueued(message="Report is being generated", download_url=url)}


@harvests_router.get("/land_commodity/{land_commodity_id}/download/file")
async def download_harvest_report(
    land_commodity_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    _: CurrentUser = Depends(get_current_user),
):
    path = HarvestService.report_file(land_commodity_id, start_date, end_date)
    return FileResponse(path, media_type=XLSX_MEDIA_TYPE, filename=path.name)


@harvests_router.get("/{harvest_id}", response_model=DataResponse[HarvestOut])
async def get_harvest(
    harvest_id: str,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    harvest = await HarvestService(session, cache).get(harvest_id)
    return {"data": HarvestOut.model_validate(harvest)}


@harvests_router.patch("/{harvest_id}", response_model=DataResponse[HarvestOut])
async def update_harvest(
    harvest_id: str,
    body: HarvestUpdate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    harvest = await HarvestService(session, cache).update(harvest_id, body)
    return {"data": HarvestOut.model_validate(harvest)}


# ------------------------------------------------------------------
# Sales
# ------------------------------------------------------------------

@sales_router.post("", response_model=DataResponse[SaleOut], status_code=status.HTTP_201_CREATED)
async def create_sale(
    body: SaleCreate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    sale = await SaleService(session, cache).create(body)
    return {"data": SaleOut.model_validate(sale)}


@sales_router.get("", response_model=ListResponse[SaleOut])
async def list_sales(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await SaleService(session, cache).list(pagination)


@sales_router.get("/commodity/{commodity_id}", response_model=ListResponse[SaleOut])
async def list_sales_by_commodity(
    commodity_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await SaleService(session, cache).list_by(pagination, commodity_id=commodity_id)


@sales_router.get("/city/{city_id}", response_model=ListResponse[SaleOut])
async def list_sales_by_city(
    city_id: int,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await SaleService(session, cache).list_by(pagination, city_id=city_id)


@sales_router.get("/{sale_id}", response_model=DataResponse[SaleOut])
async def get_sale(
    sale_id: str,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    sale = await SaleService(session, cache).get(sale_id)
    return {"data": SaleOut.model_validate(sale)}


@sales_router.patch("/{sale_id}", response_model=DataResponse[SaleOut])
async def update_sale(
    sale_id: str,
    body: SaleUpdate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    sale = await SaleService(session, cache).update(sale_id, body)
    return {"data": SaleOut.model_validate(sale)}
