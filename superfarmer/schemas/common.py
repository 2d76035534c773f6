"""Shared Pydantic schema bases with camelCase aliases."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class TimestampedOut(CamelModel):
    """Timestamps every entity response carries; deletedAt is set only on trashed rows."""

    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class MessageOut(CamelModel):
    message: str


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
