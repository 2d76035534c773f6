"""Price, supply and demand routers.

Prices are public to read by id, by pair and as history; everything else
needs a token, and writes need the Admin role.
"""

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
from superfarmer.routers.v1.deps import (
    CurrentUser,
    add_lifecycle_routes,
    get_current_user,
    require_admin,
)
from superfarmer.schemas.market import (
    PriceCreate,
    PriceOut,
    PriceUpdate,
    QuantityCreate,
    QuantityOut,
    QuantityUpdate,
)
from superfarmer.services.market import DemandService, PriceService, SupplyService

router = APIRouter(prefix="/prices", tags=["Prices"])

add_lifecycle_routes(router, PriceService, PriceOut, guard=require_admin)


def _window(start_date: date, end_date: date) -> tuple[date, date]:
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    return start_date, end_date


@router.post("", response_model=DataResponse[PriceOut], status_code=status.HTTP_201_CREATED)
async def create_price(
    body: PriceCreate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(require_admin),
):
    price = await PriceService(session, cache).create(body)
    return {"data": PriceOut.model_validate(price)}


@router.get("", response_model=ListResponse[PriceOut])
async def list_prices(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await PriceService(session, cache).list(pagination)


@router.get("/commodity/{commodity_id}", response_model=ListResponse[PriceOut])
async def list_prices_by_commodity(
    commodity_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await PriceService(session, cache).list_by(pagination, commodity_id=commodity_id)


@router.get("/city/{city_id}", response_model=ListResponse[PriceOut])
async def list_prices_by_city(
    city_id: int,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(get_current_user),
):
    return await PriceService(session, cache).list_by(pagination, city_id=city_id)


@router.get(
    "/current/commodity/{commodity_id}/city/{city_id}", response_model=DataResponse[PriceOut]
)
async def get_current_price(
    commodity_id: str,
    city_id: int,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
):
    price = await PriceService(session, cache).get_current(commodity_id, city_id)
    return {"data": PriceOut.model_validate(price)}


@router.get(
    "/history/commodity/{commodity_id}/city/{city_id}",
    response_model=DataResponse[list[PriceOut]],
)
async def get_price_history(
    commodity_id: str,
    city_id: int,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
):
    """Current price followed by every replaced price, newest first (cached)."""
    return {"data": await PriceService(session, cache).history(commodity_id, city_id)}


@router.get(
    "/history/commodity/{commodity_id}/city/{city_id}/download",
    response_model=DataResponse[ReportQueued],
    status_code=status.HTTP_202_ACCEPTED,
)
async def request_price_history_report(
    commodity_id: str,
    city_id: int,
    start_date: date = Query(...),
    end_date: date = Query(...),
    session: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher),
    _: CurrentUser = Depends(get_current_user),
):
    """Queue an Excel price-history report; poll `downloadUrl` for the file."""
    start, end = _window(start_date, end_date)
    url = await PriceService(session).request_report(publisher, commodity_id, city_id, start, end)
    return {"data": ReportQueued(message="Report is being generated", download_url=url)}


@router.get("/history/commodity/{commodity_id}/city/{city_id}/download/file")
async def download_price_history_report(
    commodity_id: str,
    city_id: int,
    start_date: date = Query(...),
    end_date: date = Query(...),
    _: CurrentUser = Depends(get_current_user),
):
    start, end = _window(start_date, end_date)
    path = PriceService.report_file(commodity_id, city_id, start, end)
    return FileResponse(path, media_type=XLSX_MEDIA_TYPE, filename=path.name)


@router.get("/{price_id}", response_model=DataResponse[PriceOut])
async def get_price(
    price_id: str,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
):
    price = await PriceService(session, cache).get(price_id)
    return {"data": PriceOut.model_validate(price)}


@router.patch("/{price_id}", response_model=DataResponse[PriceOut])
async def update_price(
    price_id: str,
    body: PriceUpdate,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _: CurrentUser = Depends(require_admin),
):
    """Update a price; the previous value is archived to the price history."""
    price = await PriceService(session, cache).update(price_id, body)
    return {"data": PriceOut.model_validate(price)}


def _quantity_router(prefix: str, tag: str, service_cls: type) -> APIRouter:
    """Supplies and demands expose the same endpoints over different tables."""
    qrouter = APIRouter(prefix=prefix, tags=[tag])
    add_lifecycle_routes(qrouter, service_cls, QuantityOut, guard=require_admin)

    @qrouter.post("", response_model=DataResponse[QuantityOut], status_code=status.HTTP_201_CREATED)
    async def create(
        body: QuantityCreate,
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(require_admin),
    ):
        return {"data": QuantityOut.model_validate(await service_cls(session).create(body))}

    @qrouter.get("", response_model=ListResponse[QuantityOut])
    async def list_all(
        pagination: PaginationParams = Depends(),
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        return await service_cls(session).list(pagination)

    @qrouter.get("/commodity/{commodity_id}", response_model=ListResponse[QuantityOut])
    async def list_by_commodity(
        commodity_id: str,
        pagination: PaginationParams = Depends(),
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        return await service_cls(session).list_by(pagination, commodity_id=commodity_id)

    @qrouter.get("/city/{city_id}", response_model=ListResponse[QuantityOut])
    async def list_by_city(
        city_id: int,
        pagination: PaginationParams = Depends(),
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        return await service_cls(session).list_by(pagination, city_id=city_id)

    @qrouter.get(
        "/history/commodity/{commodity_id}/city/{city_id}",
        response_model=DataResponse[list[QuantityOut]],
    )
    async def history(
        commodity_id: str,
        city_id: int,
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        return {"data": await service_cls(session).history(commodity_id, city_id)}

    @qrouter.get("/{entity_id}", response_model=DataResponse[QuantityOut])
    async def get_one(
        entity_id: str,
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        return {"data": QuantityOut.model_validate(await service_cls(session).get(entity_id))}

    @qrouter.patch("/{entity_id}", response_model=DataResponse[QuantityOut])
    async def update(
        entity_id: str,
        body: QuantityUpdate,
        session: AsyncSession = Depends(get_db),
        _: CurrentUser = Depends(require_admin),
    ):
        return {
            "data": QuantityOut.model_validate(await service_cls(session).update(entity_id, body))
        }

    return qrouter


supplies_router = _quantity_router("/supplies", "Supplies", SupplyService)
demands_router = _quantity_router("/demands", "Demands", DemandService)
