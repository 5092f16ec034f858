"""Interaction event model for simulated user activity."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import DBModel


class EventType(str, Enum):
    """Kind of user interaction."""

    VIEW = "view"
    CLICK = "click"


class InteractionEvent(DBModel):
    """A single simulated user interaction with an article."""

    id: Optional[int] = Field(None, description="Primary key, assigned by the store")
    article_id: str = Field(..., description="Referenced article")
    event_type: EventType = Field(..., description="View or click")
    latitude: float = Field(..., description="Latitude of the simulated user")
    longitude: float = Field(..., description="Longitude of the simulated user")
    created_at: datetime = Field(..., description="When the interaction happened")

    class Config:
        """Pydantic config."""

        from_attributes = True
        frozen = True

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
