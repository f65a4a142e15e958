"""Mission ORM — actionable task created from an applied suggestion.

Invariants:
    - source_suggestion_id is UNIQUE: at most one mission per suggestion,
      which makes the apply flow safe to retry
    - completion_status transitions (pending -> completed) belong to the mission tracker

Design Decisions:
    - source_suggestion_id is a plain column, not a foreign key: missions outlive
      suggestion retention
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from lifebalance.db.base import Base


class MissionRow(Base):
    """Category mission owned by the mission-tracking subsystem once created."""
    __tablename__ = "missions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    source_suggestion_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, unique=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    difficulty_level: Mapped[str] = mapped_column(
        String(10), nullable=False, default="medium",
    )
    xp_reward: Mapped[int] = mapped_column(Integer, nullable=False)
    is_suggestion: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    suggestion_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    completion_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
