"""Database models."""

from app.models.activity import ActivityRecord, ActivityType
from app.models.participant import ParticipantRecord

__all__ = [
    "ActivityRecord",
    "ActivityType",
    "ParticipantRecord",
]
