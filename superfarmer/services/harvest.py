"""Harvest and sale services."""

from __future__ import annotations

import logging
from datetime import date

from superfarmer.core.config import settings
from superfarmer.core.exceptions import NotFoundError
from superfarmer.core.messaging import HARVEST_ROUTING_KEY, Publisher
from superfarmer.core.pagination import PaginationParams
from superfarmer.core.reports import harvest_prefix, latest_report
from superfarmer.core.response import paginated
from superfarmer.domain.harvest import Harvest
from superfarmer.domain.sale import Sale
from superfarmer.repositories.commodity import CommodityRepository
from superfarmer.repositories.harvest import HarvestRepository, SaleRepository
from superfarmer.repositories.land import LandCommodityRepository
from superfarmer.repositories.region import CityRepository
from superfarmer.schemas.harvest import (
    HarvestCreate,
    HarvestOut,
    HarvestUpdate,
    SaleCreate,
    SaleOut,
)
from superfarmer.schemas.report import HarvestReportRequest
from superfarmer.services.base import CrudService

logger = logging.getLogger(__name__)


class HarvestService(CrudService[Harvest]):
    entity = "Harvest"
    repository_cls = HarvestRepository
    out_schema = HarvestOut
    cache_namespace = "harvests"

    async def create(self, data: HarvestCreate) -> Harvest:
        await self._require(LandCommodityRepository, "Land commodity", data.land_commodity_id)
        await self._require(CityRepository, "City", data.city_id)
        return await super().create(data)

    async def update(self, harvest_id: str, data: HarvestUpdate) -> Harvest:
        if data.city_id is not None:
            await self._require(CityRepository, "City", data.city_id)
        return await super().update(harvest_id, data)

    async def list_by_land_commodity_field(
        self, pagination: PaginationParams, field: str, value: str
    ) -> dict:
        """Harvests for every land commodity on a land (`land_id`) or of a commodity."""

        async def load() -> dict:
            items, total = await self._repo.list_by_land_commodity_field(pagination, field, value)
            return paginated(self._dump(items), total, pagination)

        if self._cache is None:
            return await load()
        key = f"harvests:list:{field}={value}:{pagination.cache_key()}"
        return await self._cache.get_or_set(key, load)

    async def request_report(
        self, publisher: Publisher, land_commodity_id: str, start: date, end: date
    ) -> str:
        await self._require(LandCommodityRepository, "Land commodity", land_commodity_id)
        message = HarvestReportRequest(
            land_commodity_id=land_commodity_id, start_date=start, end_date=end,
        )
        await publisher.publish_report(
            HARVEST_ROUTING_KEY, message.model_dump(mode="json", by_alias=True)
        )
        logger.info("Queued harvest report for %s", land_commodity_id)
        return (
            f"{settings.public_base_url}/api/v1/harvests/land_commodity/{land_commodity_id}"
            f"/download/file?start_date={start}&end_date={end}"
        )

    @staticmethod
    def report_file(land_commodity_id: str, start: date, end: date):
        path = latest_report(harvest_prefix(land_commodity_id, start, end))
        if path is None:
            raise NotFoundError("Report file")
        return path


class SaleService(CrudService[Sale]):
    entity = "Sale"
    repository_cls = SaleRepository
    out_schema = SaleOut
    cache_namespace = "sales"

    async def create(self, data: SaleCreate) -> Sale:
        await self._require(CommodityRepository, "Commodity", data.commodity_id)
        await self._require(CityRepository, "City", data.city_id)
        return await super().create(data)
