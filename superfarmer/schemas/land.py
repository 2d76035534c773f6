"""Land and land-commodity schemas. Areas are in hectares."""

from typing import Optional

from pydantic import Field

from superfarmer.schemas.common import CamelModel, TimestampedOut


class LandCreate(CamelModel):
    city_id: int
    land_area: float = Field(gt=0)
    certificate: Optional[str] = Field(default=None, max_length=255)


class LandUpdate(CamelModel):
    city_id: Optional[int] = None
    land_area: Optional[float] = Field(default=None, gt=0)
    certificate: Optional[str] = Field(default=None, max_length=255)


class LandOut(TimestampedOut):
    id: str
    user_id: str
    city_id: int
    land_area: float
    certificate: Optional[str] = None


class LandCommodityCreate(CamelModel):
    land_id: str
    commodity_id: str
    land_area: float = Field(gt=0)


class LandCommodityUpdate(CamelModel):
    commodity_id: Optional[str] = None
    land_area: Optional[float] = Field(default=None, gt=0)


class LandCommodityOut(TimestampedOut):
    id: str
    land_id: str
    commodity_id: str
    land_area: float
