"""Land and land-commodity services.

A land commodity may only claim area that is still free on its land.
"""

from superfarmer.core.exceptions import BadRequestError, ForbiddenError
from superfarmer.domain.land import Land, LandCommodity
from superfarmer.repositories.commodity import CommodityRepository
from superfarmer.repositories.land import LandCommodityRepository, LandRepository
from superfarmer.repositories.region import CityRepository
from superfarmer.schemas.land import (
    LandCommodityCreate,
    LandCommodityOut,
    LandCommodityUpdate,
    LandCreate,
    LandOut,
    LandUpdate,
)
from superfarmer.services.base import CrudService


class LandService(CrudService[Land]):
    entity = "Land"
    repository_cls = LandRepository
    out_schema = LandOut

    async def create(self, data: LandCreate, user_id: str) -> Land:
        await self._require(CityRepository, "City", data.city_id)
        return await super().create(data, user_id=user_id)

    async def update(self, land_id: str, data: LandUpdate) -> Land:
        if data.city_id is not None:
            await self._require(CityRepository, "City", data.city_id)
        if data.land_area is not None:
            planted = await LandCommodityRepository(self._session).planted_area(land_id)
            if data.land_area < planted:
                raise BadRequestError(
                    f"Land area {data.land_area} is smaller than the {planted} already planted"
                )
        return await super().update(land_id, data)

    async def ensure_owner(self, land_id: str, user_id: str, is_admin: bool) -> Land:
        land = await self.get(land_id)
        if land.user_id != user_id and not is_admin:
            raise ForbiddenError("You do not own this land")
        return land


class LandCommodityService(CrudService[LandCommodity]):
    entity = "Land commodity"
    repository_cls = LandCommodityRepository
    out_schema = LandCommodityOut
    dependent_namespaces = ("harvests",)

    async def _check_area(self, land_id: str, area: float, exclude_id: str | None = None) -> None:
        land = await self._require(LandRepository, "Land", land_id)
        planted = await self._repo.planted_area(land_id, exclude_id=exclude_id)
        if planted + area > land.land_area:
            raise BadRequestError("Land area not enough")

    async def create(self, data: LandCommodityCreate) -> LandCommodity:
        await self._require(CommodityRepository, "Commodity", data.commodity_id)
        await self._check_area(data.land_id, data.land_area)
        return await super().create(data)

    async def update(self, land_commodity_id: str, data: LandCommodityUpdate) -> LandCommodity:
        current = await self.get(land_commodity_id)
        if data.commodity_id is not None:
            await self._require(CommodityRepository, "Commodity", data.commodity_id)
        if data.land_area is not None:
            await self._check_area(current.land_id, data.land_area, exclude_id=land_commodity_id)
        return await super().update(land_commodity_id, data)

    async def restore(self, land_commodity_id: str) -> LandCommodity:
        deleted = await self.get_deleted(land_commodity_id)
        await self._check_area(deleted.land_id, deleted.land_area)
        return await super().restore(land_commodity_id)
