"""Services for business logic."""

from app.services.activity_mapper import ActivityMapper
from app.services.activity_service import ActivityService

__all__ = ["ActivityMapper", "ActivityService"]
