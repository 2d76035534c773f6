"""Price, supply and demand schemas. Supplies and demands share the Quantity* shapes."""

from typing import Optional

from pydantic import Field

from superfarmer.schemas.common import CamelModel, TimestampedOut


class PriceCreate(CamelModel):
    commodity_id: str
    city_id: int
    price: float = Field(gt=0)
    unit: str = Field(default="kg", max_length=20)


class PriceUpdate(CamelModel):
    price: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = Field(default=None, max_length=20)


class PriceOut(TimestampedOut):
    id: str
    commodity_id: str
    city_id: int
    price: float
    unit: str


class QuantityCreate(CamelModel):
    commodity_id: str
    city_id: int
    quantity: float = Field(ge=0)
    unit: str = Field(default="kg", max_length=20)


class QuantityUpdate(CamelModel):
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = Field(default=None, max_length=20)


class QuantityOut(TimestampedOut):
    id: str
    commodity_id: str
    city_id: int
    quantity: float
    unit: str

