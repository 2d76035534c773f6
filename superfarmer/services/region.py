from superfarmer.core.exceptions import ConflictError
from superfarmer.domain.region import City, Province
from superfarmer.repositories.region import CityRepository, ProvinceRepository
from superfarmer.schemas.region import CityCreate, CityOut, CityUpdate, ProvinceCreate, ProvinceOut
from superfarmer.services.base import CrudService


class ProvinceService(CrudService[Province]):
    entity = "Province"
    repository_cls = ProvinceRepository
    out_schema = ProvinceOut

    async def create(self, data: ProvinceCreate) -> Province:
        if await self._repo.find_one(name=data.name, include_deleted=True):
            raise ConflictError(f"Province '{data.name}' already exists")
        return await super().create(data)


class CityService(CrudService[City]):
    entity = "City"
    repository_cls = CityRepository
    out_schema = CityOut

    async def create(self, data: CityCreate) -> City:
        await self._require(ProvinceRepository, "Province", data.province_id)
        return await super().create(data)

    async def update(self, city_id: int, data: CityUpdate) -> City:
        if data.province_id is not None:
            await self._require(ProvinceRepository, "Province", data.province_id)
        return await super().update(city_id, data)
