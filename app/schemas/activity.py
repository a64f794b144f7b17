"""Activity schemas for API validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.activity import ActivityType
from app.schemas.links import HalModel


class ActivityRequest(BaseModel):
    """Schema for creating or replacing an activity."""
    activity: str = Field(min_length=1, max_length=255)
    type: ActivityType
    max_participants: int = Field(1, ge=1, le=1000)
    price: float = Field(0.0, ge=0.0, le=1.0)
    accessibility: float = Field(0.0, ge=0.0, le=1.0)
    link: Optional[str] = Field(None, max_length=500)


class Activity(HalModel):
    """Schema for activity response."""
    alternate_key: str
    activity: str
    type: ActivityType
    max_participants: int
    price: float
    accessibility: float
    link: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True
