"""Activity service - orchestrates the repository and the mapper."""

import logging
import uuid
from typing import List, Optional

from app.core.exceptions import ActivityNotFoundError, InvalidParticipantError
from app.repositories.activity_repository import ActivityRepository
from app.repositories.search import SearchCriterion
from app.schemas.activity import Activity, ActivityRequest
from app.schemas.page import Page
from app.schemas.participant import Participant, ParticipantRequest
from app.services.activity_mapper import ActivityMapper

logger = logging.getLogger(__name__)


class ActivityService:
    """Service for activities and their participants."""

    def __init__(
        self,
        activity_repository: ActivityRepository,
        activity_mapper: Optional[ActivityMapper] = None,
    ):
        self.activity_repository = activity_repository
        self.activity_mapper = activity_mapper or ActivityMapper()

    async def get_activities(
        self,
        search: Optional[List[SearchCriterion]],
        page: int,
        size: int,
    ) -> Page[Activity]:
        """Get one page of activities, filtered by ``search`` when given."""
        activity_records = await self.activity_repository.get_all(page, size, search)
        return activity_records.map(self.activity_mapper.to_activity_response)

    async def get_activity_by(self, alternate_key: str) -> Optional[Activity]:
        """Get an activity by its alternate key, or None if there is none."""
        activity_record = await self.activity_repository.get_by(alternate_key)
        if activity_record is None:
            return None
        return self.activity_mapper.to_activity_response(activity_record)

    async def _save(self, alternate_key: str, activity_request: ActivityRequest) -> Activity:
        activity_record = self.activity_mapper.to_activity_record(activity_request)
        activity_record.alternate_key = alternate_key
        saved = await self.activity_repository.save(activity_record)
        return self.activity_mapper.to_activity_response(saved)

    async def new_activity(self, activity_request: ActivityRequest) -> Activity:
        """Create an activity under a freshly generated alternate key."""
        activity = await self._save(str(uuid.uuid4()), activity_request)
        logger.info(f"Created activity {activity.alternate_key}")
        return activity

    async def update_activity(self, alternate_key: str, activity_request: ActivityRequest) -> Activity:
        """
        Store the request under the given alternate key.

        Overwrites the existing activity, or creates one when the key is unknown.
        """
        activity = await self._save(alternate_key, activity_request)
        logger.info(f"Saved activity {alternate_key}")
        return activity

    async def delete_activity(self, alternate_key: str) -> bool:
        """Delete an activity. Returns False when nothing matched."""
        deleted = await self.activity_repository.delete(alternate_key) > 0
        if deleted:
            logger.info(f"Deleted activity {alternate_key}")
        return deleted

    async def get_activity_participants(
        self,
        alternate_key: str,
        page: int,
        size: int,
    ) -> Page[Participant]:
        """Get one page of participants. Unknown activities yield an empty page."""
        participant_records = await self.activity_repository.get_participants(alternate_key, page, size)
        return participant_records.map(
            lambda record: self.activity_mapper.to_participant_response(record, alternate_key)
        )

    async def get_participant_by(
        self,
        alternate_key: str,
        participant_key: str,
    ) -> Optional[Participant]:
        participant_record = await self.activity_repository.get_participant_by(alternate_key, participant_key)
        if participant_record is None:
            return None
        return self.activity_mapper.to_participant_response(participant_record, alternate_key)

    async def new_participant(
        self,
        alternate_key: str,
        participant_request: ParticipantRequest,
    ) -> Participant:
        """
        Register a participant on an activity.

        Raises:
            ActivityNotFoundError: If no activity has the given alternate key
            InvalidParticipantError: If the e-mail is already registered or the activity is full
        """
        activity_record = await self.activity_repository.get_by(alternate_key)
        if activity_record is None:
            logger.warning(f"Rejected participant for unknown activity {alternate_key}")
            raise ActivityNotFoundError(alternate_key)

        email = str(participant_request.email)
        if await self.activity_repository.has_participant_email(activity_record.id, email):
            logger.warning(f"Rejected duplicate participant {email} for activity {alternate_key}")
            raise InvalidParticipantError(
                f"Participant with email {email} already takes part in activity {alternate_key}"
            )

        participant_count = await self.activity_repository.count_participants(activity_record.id)
        if participant_count >= activity_record.max_participants:
            logger.warning(f"Rejected participant for full activity {alternate_key}")
            raise InvalidParticipantError(
                f"Activity {alternate_key} already has the maximum of "
                f"{activity_record.max_participants} participants"
            )

        participant_record = self.activity_mapper.to_participant_record(participant_request, activity_record.id)
        participant_record.alternate_key = str(uuid.uuid4())
        saved = await self.activity_repository.save_participant(participant_record)
        logger.info(f"Added participant {saved.alternate_key} to activity {alternate_key}")
        return self.activity_mapper.to_participant_response(saved, alternate_key)
