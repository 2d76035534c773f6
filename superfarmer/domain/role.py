"""Roles. Ids 1 and 2 are seeded and referenced by authorization checks."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from superfarmer.db.base import Base
from superfarmer.domain.mixins import TimestampMixin

ADMIN_ROLE_ID = 1
FARMER_ROLE_ID = 2

ADMIN = "Admin"
FARMER = "Farmer"


class Role(Base, TimestampMixin):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
