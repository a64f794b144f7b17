"""API routes package."""

from fastapi import APIRouter

from app.api.routes import (
    activities,
    health,
    root,
)
from app.services.relation_service import ACTIVITIES_ROUTE

# The root router holds the bare API entry point and is mounted under the API prefix on its own
root_router = root.router

api_router = APIRouter()

api_router.include_router(activities.router, prefix=ACTIVITIES_ROUTE, tags=["Activities"])

health_router = health.router

__all__ = ["api_router", "root_router", "health_router"]
