"""Participant record - a person taking part in an activity."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base

if TYPE_CHECKING:
    from app.models.activity import ActivityRecord


class ParticipantRecord(Base):
    __tablename__ = "participants"
    __table_args__ = (
        UniqueConstraint("activity_id", "email", name="uq_participant_activity_email"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    alternate_key: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        index=True,
    )

    activity_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("activities.id", ondelete="CASCADE"),
        index=True,
    )

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    activity_record: Mapped["ActivityRecord"] = relationship(
        "ActivityRecord",
        back_populates="participant_records",
    )

    def __repr__(self) -> str:
        return f"<ParticipantRecord(alternate_key={self.alternate_key}, activity_id={self.activity_id})>"
