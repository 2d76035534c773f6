"""Read-only joins that feed the Excel report worker."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.domain.commodity import Commodity
from superfarmer.domain.harvest import Harvest
from superfarmer.domain.land import Land, LandCommodity
from superfarmer.domain.price import Price, PriceHistory
from superfarmer.domain.region import City
from superfarmer.domain.user import User
from superfarmer.repositories.base import day_end, day_start


class ReportRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def price_history_rows(
        self, commodity_id: str, city_id: int, start: date, end: date
    ) -> list[dict[str, Any]]:
        """Current price first, then the histories inside the window, newest first.

        Returns an empty list when no live price exists for the pair.
        """
        window_start, window_end = day_start(start), day_end(end)

        current = (
            await self._session.execute(
                select(
                    Price.price, Price.unit,
                    Commodity.name.label("commodity"), City.name.label("city"),
                )
                .join(Commodity, Commodity.id == Price.commodity_id)
                .join(City, City.id == Price.city_id)
                .where(Price.commodity_id == commodity_id)
                .where(Price.city_id == city_id)
                .where(Price.deleted_at.is_(None))
                .where(Price.created_at <= window_end)
                .limit(1)
            )
        ).first()
        if current is None:
            return []

        rows = [{**current._asdict(), "date": datetime.now(timezone.utc)}]

        histories = await self._session.execute(
            select(
                PriceHistory.created_at.label("date"), PriceHistory.price, PriceHistory.unit,
                Commodity.name.label("commodity"), City.name.label("city"),
            )
            .join(Commodity, Commodity.id == PriceHistory.commodity_id)
            .join(City, City.id == PriceHistory.city_id)
            .where(PriceHistory.commodity_id == commodity_id)
            .where(PriceHistory.city_id == city_id)
            .where(PriceHistory.deleted_at.is_(None))
            .where(PriceHistory.created_at.between(window_start, window_end))
            .order_by(PriceHistory.created_at.desc())
        )
        rows.extend(row._asdict() for row in histories)
        return rows

    async def harvest_rows(
        self, land_commodity_id: str, start: date, end: date
    ) -> list[dict[str, Any]]:
        """Harvests of one land commodity inside the window, newest first."""
        result = await self._session.execute(
            select(
                Harvest.harvest_date, Harvest.quantity, Harvest.unit,
                Commodity.name.label("commodity"), City.name.label("city"),
                User.name.label("farmer"),
            )
            .join(LandCommodity, LandCommodity.id == Harvest.land_commodity_id)
            .join(Commodity, Commodity.id == LandCommodity.commodity_id)
            .join(Land, Land.id == LandCommodity.land_id)
            .join(User, User.id == Land.user_id)
            .join(City, City.id == Harvest.city_id)
            .where(Harvest.land_commodity_id == land_commodity_id)
            .where(Harvest.deleted_at.is_(None))
            .where(Harvest.created_at.between(day_start(start), day_end(end)))
            .order_by(Harvest.created_at.desc())
        )
        return [row._asdict() for row in result]
