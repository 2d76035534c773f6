from typing import Optional

from pydantic import Field

from superfarmer.schemas.common import CamelModel, TimestampedOut


class CommodityCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None


class CommodityUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = None


class CommodityOut(TimestampedOut):
    id: str
    name: str
    code: str
    description: Optional[str] = None
