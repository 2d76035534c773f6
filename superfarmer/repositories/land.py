"""Land and land-commodity repositories."""

from sqlalchemy import func, select

from superfarmer.domain.land import Land, LandCommodity
from superfarmer.repositories.base import BaseRepository


class LandRepository(BaseRepository[Land]):
    model = Land
    search_column = "certificate"


class LandCommodityRepository(BaseRepository[LandCommodity]):
    model = LandCommodity
    search_column = None

    async def planted_area(self, land_id: str, *, exclude_id: str | None = None) -> float:
        """Sum of live land_area already planted on a land."""
        q = (
            select(func.coalesce(func.sum(LandCommodity.land_area), 0.0))
            .where(LandCommodity.land_id == land_id)
            .where(LandCommodity.deleted_at.is_(None))
        )
        if exclude_id:
            q = q.where(LandCommodity.id != exclude_id)
        return float((await self._session.execute(q)).scalar_one())
