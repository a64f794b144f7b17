"""Activity record - the stored form of an activity."""

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Integer, Float, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base

if TYPE_CHECKING:
    from app.models.participant import ParticipantRecord


class ActivityType(str, Enum):
    """Kinds of activities."""
    EDUCATION = "education"
    RECREATIONAL = "recreational"
    SOCIAL = "social"
    DIY = "diy"
    CHARITY = "charity"
    COOKING = "cooking"
    RELAXATION = "relaxation"
    MUSIC = "music"
    BUSYWORK = "busywork"


class ActivityRecord(Base):
    __tablename__ = "activities"

    # Internal storage id, never exposed through the API
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    alternate_key: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        index=True,
    )

    activity: Mapped[str] = mapped_column(String(255))
    type: Mapped[ActivityType] = mapped_column(SQLEnum(ActivityType), index=True)
    max_participants: Mapped[int] = mapped_column(Integer, default=1)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    accessibility: Mapped[float] = mapped_column(Float, default=0.0)
    link: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    participant_records: Mapped[List["ParticipantRecord"]] = relationship(
        "ParticipantRecord",
        back_populates="activity_record",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<ActivityRecord(alternate_key={self.alternate_key}, type={self.type})>"
