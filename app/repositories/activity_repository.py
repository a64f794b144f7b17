"""Repository for activity and participant persistence."""

import logging
from typing import List, Optional

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity import ActivityRecord
from app.models.participant import ParticipantRecord
from app.repositories.search import SearchCriterion, to_condition
from app.schemas.page import Page

logger = logging.getLogger(__name__)

# Columns copied onto an existing record when an activity is saved over it
ACTIVITY_FIELDS = ("activity", "type", "max_participants", "price", "accessibility", "link")


class ActivityRepository:
    """Repository for activity records and their participants."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_all(
        self,
        page: int,
        size: int,
        search: Optional[List[SearchCriterion]] = None,
    ) -> Page[ActivityRecord]:
        """Get one page of activities in insertion order, optionally filtered."""
        conditions = [to_condition(criterion) for criterion in search or []]

        count_query = select(func.count(ActivityRecord.id)).where(*conditions)
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = (
            select(ActivityRecord)
            .where(*conditions)
            .order_by(ActivityRecord.id)
            .offset(page * size)
            .limit(size)
        )
        result = await self.db.execute(query)

        return Page(
            content=list(result.scalars().all()),
            number=page,
            size=size,
            total_elements=total,
        )

    async def get_by(self, alternate_key: str) -> Optional[ActivityRecord]:
        """Get an activity by its alternate key."""
        result = await self.db.execute(
            select(ActivityRecord).where(ActivityRecord.alternate_key == alternate_key)
        )
        return result.scalar_one_or_none()

    async def save(self, activity_record: ActivityRecord) -> ActivityRecord:
        """
        Insert the record, or overwrite the stored one with the same alternate key.

        Returns:
            The persisted record
        """
        existing = await self.get_by(activity_record.alternate_key)
        if existing is None:
            self.db.add(activity_record)
            await self.db.flush()
            await self.db.refresh(activity_record)
            return activity_record

        for field in ACTIVITY_FIELDS:
            setattr(existing, field, getattr(activity_record, field))
        await self.db.flush()
        await self.db.refresh(existing)
        return existing

    async def delete(self, alternate_key: str) -> int:
        """
        Delete an activity and its participants.

        Returns:
            Number of activity rows removed
        """
        activity_ids = select(ActivityRecord.id).where(ActivityRecord.alternate_key == alternate_key)
        await self.db.execute(
            delete(ParticipantRecord).where(ParticipantRecord.activity_id.in_(activity_ids))
        )
        result = await self.db.execute(
            delete(ActivityRecord).where(ActivityRecord.alternate_key == alternate_key)
        )
        await self.db.flush()
        return result.rowcount or 0

    async def get_participants(
        self,
        alternate_key: str,
        page: int,
        size: int,
    ) -> Page[ParticipantRecord]:
        """Get one page of the participants of an activity."""
        count_query = (
            select(func.count(ParticipantRecord.id))
            .join(ActivityRecord, ParticipantRecord.activity_id == ActivityRecord.id)
            .where(ActivityRecord.alternate_key == alternate_key)
        )
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = (
            select(ParticipantRecord)
            .join(ActivityRecord, ParticipantRecord.activity_id == ActivityRecord.id)
            .where(ActivityRecord.alternate_key == alternate_key)
            .order_by(ParticipantRecord.id)
            .offset(page * size)
            .limit(size)
        )
        result = await self.db.execute(query)

        return Page(
            content=list(result.scalars().all()),
            number=page,
            size=size,
            total_elements=total,
        )

    async def get_participant_by(
        self,
        alternate_key: str,
        participant_key: str,
    ) -> Optional[ParticipantRecord]:
        """Get a participant of an activity by both alternate keys."""
        result = await self.db.execute(
            select(ParticipantRecord)
            .join(ActivityRecord, ParticipantRecord.activity_id == ActivityRecord.id)
            .where(ActivityRecord.alternate_key == alternate_key)
            .where(ParticipantRecord.alternate_key == participant_key)
        )
        return result.scalar_one_or_none()

    async def count_participants(self, activity_id: int) -> int:
        """Count the participants registered on an activity."""
        result = await self.db.execute(
            select(func.count(ParticipantRecord.id)).where(ParticipantRecord.activity_id == activity_id)
        )
        return result.scalar() or 0

    async def has_participant_email(self, activity_id: int, email: str) -> bool:
        """Check whether an e-mail address is already registered on an activity."""
        result = await self.db.execute(
            select(func.count(ParticipantRecord.id))
            .where(ParticipantRecord.activity_id == activity_id)
            .where(func.lower(ParticipantRecord.email) == email.lower())
        )
        return (result.scalar() or 0) > 0

    async def save_participant(self, participant_record: ParticipantRecord) -> ParticipantRecord:
        """Insert a participant record."""
        self.db.add(participant_record)
        await self.db.flush()
        await self.db.refresh(participant_record)
        logger.debug(f"Stored participant {participant_record.alternate_key}")
        return participant_record
