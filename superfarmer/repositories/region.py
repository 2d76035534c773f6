from superfarmer.domain.region import City, Province
from superfarmer.repositories.base import BaseRepository


class ProvinceRepository(BaseRepository[Province]):
    model = Province


class CityRepository(BaseRepository[City]):
    model = City
