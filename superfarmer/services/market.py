"""Price, supply and demand services.

Each (commodity, city) pair has at most one live row. Updating it first
copies the old value into the matching history table; both writes share
the request's transaction.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from superfarmer.core.config import settings
from superfarmer.core.exceptions import ConflictError, NotFoundError
from superfarmer.core.messaging import PRICE_HISTORY_ROUTING_KEY, Publisher
from superfarmer.core.reports import latest_report, price_history_prefix
from superfarmer.repositories.base import BaseRepository
from superfarmer.repositories.commodity import CommodityRepository
from superfarmer.repositories.market import (
    DemandHistoryRepository,
    DemandRepository,
    PriceHistoryRepository,
    PriceRepository,
    SupplyHistoryRepository,
    SupplyRepository,
)
from superfarmer.repositories.region import CityRepository
from superfarmer.schemas.common import CamelModel
from superfarmer.schemas.market import PriceOut, QuantityOut
from superfarmer.schemas.report import PriceHistoryReportRequest
from superfarmer.services.base import CrudService

logger = logging.getLogger(__name__)


class _TrackedService(CrudService):
    """CRUD over a current-value table that archives replaced values."""

    history_repository_cls: type[BaseRepository]
    # Columns copied into the history row
    tracked_fields: tuple[str, ...]

    async def _require_pair(self, commodity_id: str, city_id: int) -> None:
        await self._require(CommodityRepository, "Commodity", commodity_id)
        await self._require(CityRepository, "City", city_id)

    async def create(self, data: CamelModel) -> Any:
        await self._require_pair(data.commodity_id, data.city_id)
        if await self._repo.get_current(data.commodity_id, data.city_id):
            raise ConflictError(
                f"{self.entity} for commodity '{data.commodity_id}' "
                f"in city '{data.city_id}' already exists"
            )
        return await super().create(data)

    async def update(self, entity_id: str, data: CamelModel) -> Any:
        current = await self.get(entity_id)
        await self.history_repository_cls(self._session).create(
            commodity_id=current.commodity_id,
            city_id=current.city_id,
            **{f: getattr(current, f) for f in self.tracked_fields},
        )
        return await super().update(entity_id, data)

    async def restore(self, entity_id: str) -> Any:
        deleted = await self.get_deleted(entity_id)
        if await self._repo.get_current(deleted.commodity_id, deleted.city_id):
            raise ConflictError(
                f"A live {self.entity.lower()} already exists for this commodity and city"
            )
        return await super().restore(entity_id)

    async def get_current(self, commodity_id: str, city_id: int) -> Any:
        found = await self._repo.get_current(commodity_id, city_id)
        if found is None:
            raise NotFoundError(self.entity, f"{commodity_id}/{city_id}")
        return found

    async def _history(self, commodity_id: str, city_id: int) -> list[dict[str, Any]]:
        """Current value (when live) followed by archived values, newest first."""
        await self._require_pair(commodity_id, city_id)
        rows = []
        current = await self._repo.get_current(commodity_id, city_id)
        if current is not None:
            rows.append(current)
        rows.extend(
            await self.history_repository_cls(self._session).history_for(commodity_id, city_id)
        )
        return self._dump(rows)

    async def history(self, commodity_id: str, city_id: int) -> list[dict[str, Any]]:
        return await self._history(commodity_id, city_id)


class PriceService(_TrackedService):
    entity = "Price"
    repository_cls = PriceRepository
    history_repository_cls = PriceHistoryRepository
    out_schema = PriceOut
    tracked_fields = ("price", "unit")
    cache_namespace = "prices"

    async def history(self, commodity_id: str, city_id: int) -> list[dict[str, Any]]:
        if self._cache is None:
            return await self._history(commodity_id, city_id)
        return await self._cache.get_or_set(
            f"prices:history:{commodity_id}:{city_id}",
            lambda: self._history(commodity_id, city_id),
        )

    async def request_report(
        self, publisher: Publisher, commodity_id: str, city_id: int, start: date, end: date
    ) -> str:
        """Queue an Excel report and return the URL it will be served from."""
        await self._require_pair(commodity_id, city_id)
        message = PriceHistoryReportRequest(
            commodity_id=commodity_id, city_id=city_id, start_date=start, end_date=end,
        )
        await publisher.publish_report(
            PRICE_HISTORY_ROUTING_KEY, message.model_dump(mode="json", by_alias=True)
        )
        logger.info("Queued price history report for %s/%s", commodity_id, city_id)
        return (
            f"{settings.public_base_url}/api/v1/prices/history/commodity/{commodity_id}"
            f"/city/{city_id}/download/file?start_date={start}&end_date={end}"
        )

    @staticmethod
    def report_file(commodity_id: str, city_id: int, start: date, end: date):
        path = latest_report(price_history_prefix(commodity_id, city_id, start, end))
        if path is None:
            raise NotFoundError("Report file")
        return path


class SupplyService(_TrackedService):
    entity = "Supply"
    repository_cls = SupplyRepository
    history_repository_cls = SupplyHistoryRepository
    out_schema = QuantityOut
    tracked_fields = ("quantity", "unit")


class DemandService(_TrackedService):
    entity = "Demand"
    repository_cls = DemandRepository
    history_repository_cls = DemandHistoryRepository
    out_schema = QuantityOut
    tracked_fields = ("quantity", "unit")
