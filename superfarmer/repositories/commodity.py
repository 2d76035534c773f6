from superfarmer.domain.commodity import Commodity
from superfarmer.repositories.base import BaseRepository


class CommodityRepository(BaseRepository[Commodity]):
    model = Commodity
