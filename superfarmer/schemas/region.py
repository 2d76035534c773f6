from typing import Optional

from pydantic import Field

from superfarmer.schemas.common import CamelModel, TimestampedOut


class ProvinceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)


class ProvinceUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)


class ProvinceOut(TimestampedOut):
    id: int
    name: str


class CityCreate(CamelModel):
    province_id: int
    name: str = Field(min_length=1, max_length=255)


class CityUpdate(CamelModel):
    province_id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)


class CityOut(TimestampedOut):
    id: int
    province_id: int
    name: str
