"""Root entry point of the activities API."""

from fastapi import APIRouter

from app.api.hal import hal_response
from app.core.dependencies import Routes
from app.schemas.links import RootResponse
from app.services.relation_service import root_links

router = APIRouter()


@router.get("", response_model=RootResponse)
async def get_root(routes: Routes):
    """
    Get the root entry point.

    Clients follow the ``activities`` link instead of building URLs themselves.
    """
    root_response = RootResponse()
    root_response.add_links(root_links(routes))
    return hal_response(root_response)
