"""Farmland owned by a user and the commodities planted on it.

A land's `land_area` caps the sum of `land_area` over its live
LandCommodity rows; the service layer enforces it.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from superfarmer.db.base import Base
from superfarmer.domain.mixins import TimestampMixin, UUIDMixin


class Land(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "lands"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    city_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cities.id"), nullable=False, index=True
    )
    land_area: Mapped[float] = mapped_column(Float, nullable=False)
    certificate: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class LandCommodity(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "land_commodities"

    land_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("lands.id"), nullable=False, index=True
    )
    commodity_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("commodities.id"), nullable=False, index=True
    )
    land_area: Mapped[float] = mapped_column(Float, nullable=False)
