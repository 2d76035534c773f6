"""Harvest and sale schemas."""

from datetime import date
from typing import Optional

from pydantic import Field

from superfarmer.schemas.common import CamelModel, TimestampedOut


class HarvestCreate(CamelModel):
    land_commodity_id: str
    city_id: int
    quantity: float = Field(gt=0)
    unit: str = Field(default="kg", max_length=20)
    harvest_date: date


class HarvestUpdate(CamelModel):
    city_id: Optional[int] = None
    quantity: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = Field(default=None, max_length=20)
    harvest_date: Optional[date] = None


class HarvestOut(TimestampedOut):
    id: str
    land_commodity_id: str
    city_id: int
    quantity: float
    unit: str
    harvest_date: date


class SaleCreate(CamelModel):
    commodity_id: str
    city_id: int
    quantity: float = Field(gt=0)
    unit: str = Field(default="kg", max_length=20)
    price: float = Field(gt=0)
    sale_date: date


class SaleUpdate(CamelModel):
    quantity: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = Field(default=None, max_length=20)
    price: Optional[float] = Field(default=None, gt=0)
    sale_date: Optional[date] = None


class SaleOut(TimestampedOut):
    id: str
    commodity_id: str
    city_id: int
    quantity: float
    unit: str
    price: float
    sale_date: date
