"""Activity and participant endpoints."""

import logging

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import PlainTextResponse

from app.api.hal import hal_response
from app.core.config import get_settings
from app.core.dependencies import ActivityServiceDep, Routes
from app.repositories.search import parse_search
from app.schemas.activity import Activity, ActivityRequest
from app.schemas.participant import Participant, ParticipantRequest
from app.services.relation_service import (
    ACTIVITIES_ROUTE,
    PARTICIPANTS_ROUTE,
    RELATION_ACTIVITIES,
    RELATION_PARTICIPANTS,
    RELATION_SELF,
    activity_links,
    convert_to_uri,
    participant_links,
    to_paged_model,
)

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter()


def _uri_failure(message: str) -> PlainTextResponse:
    logger.warning(message)
    return PlainTextResponse(status_code=status.HTTP_400_BAD_REQUEST, content=message)


@router.get(
    "",
    responses={
        200: {"description": "A paged model of activities"},
        204: {"description": "Sadly there are no activities yet"},
    },
)
async def get_activities(
    activity_service: ActivityServiceDep,
    routes: Routes,
    search: str = Query("", description="An optional search string, f.e. type==busywork"),
    page: int = Query(0, ge=0, le=settings.max_page, description="The page index"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="The page size"),
):
    """
    List activities as a paged HAL collection.

    An empty search string means no filter.
    """
    criteria = parse_search(search) if search else None
    activities = await activity_service.get_activities(criteria, page, size)
    if activities.is_empty:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    for activity in activities.content:
        activity.add_links(activity_links(activity.alternate_key, routes))

    query = {"search": search} if search else None
    return hal_response(
        to_paged_model(activities, RELATION_ACTIVITIES, routes.href(ACTIVITIES_ROUTE), query)
    )


@router.get(
    "/{alternate_key}",
    response_model=Activity,
    responses={404: {"description": "Activity not found"}},
)
async def get_activity_by(
    alternate_key: str,
    activity_service: ActivityServiceDep,
    routes: Routes,
):
    """Get an activity by its alternate key."""
    activity = await activity_service.get_activity_by(alternate_key)
    if activity is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    activity.add_links(activity_links(alternate_key, routes))
    return hal_response(activity)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Activity,
    responses={400: {"description": "Invalid activity request"}},
)
async def new_activity(
    activity_request: ActivityRequest,
    activity_service: ActivityServiceDep,
    routes: Routes,
):
    """
    Create an activity.

    The server assigns the alternate key; the Location header points at the new activity.
    """
    activity = await activity_service.new_activity(activity_request)
    activity.add_links(activity_links(activity.alternate_key, routes))

    activity_uri = convert_to_uri(activity.get_required_link(RELATION_SELF))
    if activity_uri is None:
        return _uri_failure(
            f"Failed to create URI to new activity with alternate key {activity.alternate_key}"
        )
    return hal_response(activity, status_code=status.HTTP_201_CREATED, headers={"Location": activity_uri})


@router.put(
    "/{alternate_key}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"description": "Invalid activity request"}},
)
async def update_activity(
    alternate_key: str,
    activity_request: ActivityRequest,
    activity_service: ActivityServiceDep,
    routes: Routes,
):
    """
    Update an activity.

    Stores the request under the given key, creating the activity if it does not exist yet.
    """
    await activity_service.update_activity(alternate_key, activity_request)

    activity_uri = convert_to_uri(activity_links(alternate_key, routes)[RELATION_SELF])
    if activity_uri is None:
        return _uri_failure(
            f"Failed to create URI to updated activity with alternate key {alternate_key}"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Location": activity_uri})


@router.delete(
    "/{alternate_key}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Activity to delete not found"}},
)
async def delete_activity(
    alternate_key: str,
    activity_service: ActivityServiceDep,
):
    """Delete an activity and its participants."""
    if await activity_service.delete_activity(alternate_key):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.get(
    "/{alternate_key}/participants",
    responses={
        200: {"description": "A paged model of activity participants"},
        204: {"description": "Sadly there are no participants for the given activity"},
    },
)
async def get_participants_by(
    alternate_key: str,
    activity_service: ActivityServiceDep,
    routes: Routes,
    page: int = Query(0, ge=0, le=settings.max_page, description="The page index"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="The page size"),
):
    """List the participants of an activity, f.e. a public party."""
    participants = await activity_service.get_activity_participants(alternate_key, page, size)
    if participants.is_empty:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    for participant in participants.content:
        participant.add_links(participant_links(alternate_key, participant.alternate_key, routes))

    return hal_response(
        to_paged_model(
            participants,
            RELATION_PARTICIPANTS,
            routes.href(PARTICIPANTS_ROUTE, alternate_key=alternate_key),
        )
    )


@router.get(
    "/{alternate_key}/participants/{participant_key}",
    response_model=Participant,
    responses={404: {"description": "Participant not found"}},
)
async def get_participant_by(
    alternate_key: str,
    participant_key: str,
    activity_service: ActivityServiceDep,
    routes: Routes,
):
    """Get a single participant of an activity."""
    participant = await activity_service.get_participant_by(alternate_key, participant_key)
    if participant is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    participant.add_links(participant_links(alternate_key, participant_key, routes))
    return hal_response(participant)


@router.post(
    "/{alternate_key}/participants",
    status_code=status.HTTP_201_CREATED,
    response_model=Participant,
    responses={400: {"description": "Invalid participant request"}},
)
async def new_participant(
    alternate_key: str,
    participant_request: ParticipantRequest,
    activity_service: ActivityServiceDep,
    routes: Routes,
):
    """
    Register a participant on an activity.

    Fails with 400 when the activity does not exist, the e-mail is already
    registered on it, or it is full.
    """
    participant = await activity_service.new_participant(alternate_key, participant_request)
    participant.add_links(participant_links(alternate_key, participant.alternate_key, routes))

    participant_uri = convert_to_uri(participant.get_required_link(RELATION_SELF))
    if participant_uri is None:
        return _uri_failure(
            f"Failed to create URI to new participant with alternate key {participant.alternate_key}"
        )
    return hal_response(participant, status_code=status.HTTP_201_CREATED, headers={"Location": participant_uri})
