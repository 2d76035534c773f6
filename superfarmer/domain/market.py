"""Supply and demand quantities per commodity and city, with history tables."""

from __future__ import annotations

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from superfarmer.db.base import Base
from superfarmer.domain.mixins import CommodityCityMixin, TimestampMixin, UUIDMixin


class _QuantityMixin:
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="kg", nullable=False)


class Supply(Base, UUIDMixin, CommodityCityMixin, _QuantityMixin, TimestampMixin):
    __tablename__ = "supplies"


class SupplyHistory(Base, UUIDMixin, CommodityCityMixin, _QuantityMixin, TimestampMixin):
    __tablename__ = "supply_histories"


class Demand(Base, UUIDMixin, CommodityCityMixin, _QuantityMixin, TimestampMixin):
    __tablename__ = "demands"


class DemandHistory(Base, UUIDMixin, CommodityCityMixin, _QuantityMixin, TimestampMixin):
    __tablename__ = "demand_histories"
