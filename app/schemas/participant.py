"""Participant schemas for API validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.links import HalModel


class ParticipantRequest(BaseModel):
    """Schema for registering a participant on an activity."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class Participant(HalModel):
    """Schema for participant response."""
    alternate_key: str
    activity_alternate_key: str
    first_name: str
    last_name: str
    email: str
    created_at: Optional[datetime] = None
