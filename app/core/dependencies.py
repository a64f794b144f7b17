"""FastAPI dependencies shared by the route modules."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.repositories.activity_repository import ActivityRepository
from app.services.activity_service import ActivityService
from app.services.relation_service import RouteTable

DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_activity_service(db: DbSession) -> ActivityService:
    """Build a request-scoped activity service."""
    return ActivityService(ActivityRepository(db))


def get_route_table(request: Request) -> RouteTable:
    """
    Build the route table used for link assembly.

    The configured base URL wins; otherwise links point back at the host
    the request was made to.
    """
    settings = get_settings()
    base_url = settings.effective_base_url or str(request.base_url)
    return RouteTable(base_url=base_url.rstrip("/"), prefix=settings.api_prefix)


ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]
Routes = Annotated[RouteTable, Depends(get_route_table)]
