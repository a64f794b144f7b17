"""Pydantic schemas for API request/response validation."""

from app.schemas.activity import Activity, ActivityRequest
from app.schemas.links import HalModel, Link, RootResponse
from app.schemas.page import Page, PageMetadata, PagedModel
from app.schemas.participant import Participant, ParticipantRequest

__all__ = [
    "Activity",
    "ActivityRequest",
    "HalModel",
    "Link",
    "RootResponse",
    "Page",
    "PageMetadata",
    "PagedModel",
    "Participant",
    "ParticipantRequest",
]
