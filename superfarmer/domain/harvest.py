from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from superfarmer.db.base import Base
from superfarmer.domain.mixins import TimestampMixin, UUIDMixin


class Harvest(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "harvests"

    land_commodity_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("land_commodities.id"), nullable=False, index=True
    )
    city_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cities.id"), nullable=False, index=True
    )
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="kg", nullable=False)
    harvest_date: Mapped[date] = mapped_column(Date, nullable=False)
