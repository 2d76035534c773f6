from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from superfarmer.db.base import Base
from superfarmer.domain.mixins import TimestampMixin, UUIDMixin


class Commodity(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "commodities"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
