"""ProgressEntry ORM — one satisfaction score per subject, category and day.

Invariants:
    - UNIQUE (subject_id, category, entry_date): repeat writes overwrite, never append
    - score is 1–100 (CHECK constraint backs the core validation)
    - created_at set once on first insert; updated_at refreshed on every overwrite

Design Decisions:
    - category stored as its string tag: readable rows, enum enforced in core
    - subject_id is not a foreign key: subjects are owned by the excluded account system
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Date, DateTime, UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from lifebalance.db.base import Base


class ProgressEntryRow(Base):
    """Daily self-rating for one life category."""
    __tablename__ = "life_progress_entries"
    __table_args__ = (
        UniqueConstraint(
            "subject_id", "category", "entry_date",
            name="uq_life_progress_entries_subject_category_date",
        ),
        CheckConstraint(
            "satisfaction_score BETWEEN 1 AND 100",
            name="ck_life_progress_entries_score_range",
        ),
        Index("ix_life_progress_entries_subject_date", "subject_id", "entry_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    satisfaction_score: Mapped[int] = mapped_column(Integer, nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
