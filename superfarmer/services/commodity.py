from superfarmer.core.exceptions import ConflictError
from superfarmer.domain.commodity import Commodity
from superfarmer.repositories.commodity import CommodityRepository
from superfarmer.schemas.commodity import CommodityCreate, CommodityOut, CommodityUpdate
from superfarmer.services.base import CrudService


class CommodityService(CrudService[Commodity]):
    entity = "Commodity"
    repository_cls = CommodityRepository
    out_schema = CommodityOut
    cache_namespace = "commodities"

    async def _check_unique(self, name: str | None, code: str | None, current_id: str | None = None):
        for field, value in (("name", name), ("code", code)):
            if value is None:
                continue
            clash = await self._repo.find_one(include_deleted=True, **{field: value})
            if clash is not None and clash.id != current_id:
                raise ConflictError(f"Commodity with {field} '{value}' already exists")

    async def create(self, data: CommodityCreate) -> Commodity:
        await self._check_unique(data.name, data.code)
        return await super().create(data)

    async def update(self, commodity_id: str, data: CommodityUpdate) -> Commodity:
        await self._check_unique(data.name, data.code, current_id=commodity_id)
        return await super().update(commodity_id, data)
