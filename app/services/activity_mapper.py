"""Conversions between persistence records and API representations."""

from app.models.activity import ActivityRecord
from app.models.participant import ParticipantRecord
from app.schemas.activity import Activity, ActivityRequest
from app.schemas.participant import Participant, ParticipantRequest


class ActivityMapper:
    """Maps requests to records and records to responses."""

    @staticmethod
    def to_activity_record(activity_request: ActivityRequest) -> ActivityRecord:
        """Build an unsaved record from a request. The alternate key is left unset."""
        return ActivityRecord(
            activity=activity_request.activity,
            type=activity_request.type,
            max_participants=activity_request.max_participants,
            price=activity_request.price,
            accessibility=activity_request.accessibility,
            link=activity_request.link,
        )

    @staticmethod
    def to_activity_response(activity_record: ActivityRecord) -> Activity:
        return Activity.model_validate(activity_record)

    @staticmethod
    def to_participant_record(
        participant_request: ParticipantRequest,
        activity_id: int,
    ) -> ParticipantRecord:
        return ParticipantRecord(
            activity_id=activity_id,
            first_name=participant_request.first_name,
            last_name=participant_request.last_name,
            email=str(participant_request.email),
        )

    @staticmethod
    def to_participant_response(
        participant_record: ParticipantRecord,
        activity_alternate_key: str,
    ) -> Participant:
        return Participant(
            alternate_key=participant_record.alternate_key,
            activity_alternate_key=activity_alternate_key,
            first_name=participant_record.first_name,
            last_name=participant_record.last_name,
            email=participant_record.email,
            created_at=participant_record.created_at,
        )
