"""Current commodity prices per city, plus the history of replaced values.

Only one live Price row exists per (commodity, city). Every update copies
the previous value into PriceHistory first.
"""

from __future__ import annotations

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from superfarmer.db.base import Base
from superfarmer.domain.mixins import CommodityCityMixin, TimestampMixin, UUIDMixin


class Price(Base, UUIDMixin, CommodityCityMixin, TimestampMixin):
    __tablename__ = "prices"

    price: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="kg", nullable=False)


class PriceHistory(Base, UUIDMixin, CommodityCityMixin, TimestampMixin):
    __tablename__ = "price_histories"

    price: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="kg", nullable=False)
