"""Repositories for prices, supplies, demands and their history tables.

Each "current" table holds at most one live row per (commodity, city);
the matching history table keeps every value it replaced.
"""

from __future__ import annotations

from superfarmer.domain.market import Demand, DemandHistory, Supply, SupplyHistory
from superfarmer.domain.price import Price, PriceHistory
from superfarmer.repositories.base import BaseRepository, ModelT


class _CommodityCityRepository(BaseRepository[ModelT]):
    search_column = None

    async def get_current(self, commodity_id: str, city_id: int):
        return await self.find_one(commodity_id=commodity_id, city_id=city_id)

    async def history_for(self, commodity_id: str, city_id: int) -> list:
        """Every live row for the pair, newest first."""
        result = await self._session.execute(
            self._base_query()
            .where(self.model.commodity_id == commodity_id)
            .where(self.model.city_id == city_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())


class PriceRepository(_CommodityCityRepository[Price]):
    model = Price


class PriceHistoryRepository(_CommodityCityRepository[PriceHistory]):
    model = PriceHistory


class SupplyRepository(_CommodityCityRepository[Supply]):
    model = Supply


class SupplyHistoryRepository(_CommodityCityRepository[SupplyHistory]):
    model = SupplyHistory


class DemandRepository(_CommodityCityRepository[Demand]):
    model = Demand


class DemandHistoryRepository(_CommodityCityRepository[DemandHistory]):
    model = DemandHistory
