"""Harvest and sale repositories."""

from superfarmer.core.pagination import PaginationParams
from superfarmer.domain.harvest import Harvest
from superfarmer.domain.land import LandCommodity
from superfarmer.domain.sale import Sale
from superfarmer.repositories.base import BaseRepository


class HarvestRepository(BaseRepository[Harvest]):
    model = Harvest
    search_column = None

    async def list_by_land_commodity_field(
        self, pagination: PaginationParams, field: str, value: str
    ) -> tuple[list[Harvest], int]:
        """Harvests whose land commodity has `field == value` (land_id or commodity_id)."""
        q = (
            self._base_query()
            .join(LandCommodity, LandCommodity.id == Harvest.land_commodity_id)
            .where(getattr(LandCommodity, field) == value)
            .where(LandCommodity.deleted_at.is_(None))
        )
        return await self._paginate(q, pagination)


class SaleRepository(BaseRepository[Sale]):
    model = Sale
    search_column = None
