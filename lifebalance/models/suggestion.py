"""Suggestion ORM — time-boxed remediation recommendation for one category.

Invariants:
    - is_active flips to False exactly once, when applied (applied_at set together)
    - Expiry is never written: rows past expires_at are filtered at read time
    - priority: higher = more urgent

Design Decisions:
    - `meta` attribute maps to the `metadata` column (name reserved by DeclarativeBase)
    - JSON for metadata: severity, threshold and window recorded without schema churn
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Float, Boolean, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from lifebalance.db.base import Base


class SuggestionRow(Base):
    """Generated life-balance suggestion."""
    __tablename__ = "life_progress_suggestions"
    __table_args__ = (
        Index(
            "ix_life_progress_suggestions_subject_active",
            "subject_id", "is_active", "expires_at",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    suggestion_text: Mapped[str] = mapped_column(Text, nullable=False)
    suggestion_type: Mapped[str] = mapped_column(String(20), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    based_on_score: Mapped[float] = mapped_column(Float, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    applied_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    meta: Mapped[dict] = mapped_column(
        "metadata", JSON, nullable=False, default=dict,
    )
