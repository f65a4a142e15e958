"""Domain Records — plain dataclasses exchanged between core, services and repository.

Invariants:
    - Records carry no behaviour beyond trivial derived properties
    - ProgressEntry, Suggestion, Mission mirror stored rows; the rest are derived, never stored
    - Suggestion.is_live(now) is the single definition of "active and unexpired"

Design Decisions:
    - Dataclasses over ORM objects at the boundary: core never imports SQLAlchemy
    - Derived records are frozen: computed once, read many times
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from lifebalance.core.domain_types import (
    LifeCategory, Trend, ImbalanceSeverity, SuggestionType,
    MissionDifficulty, CompletionStatus,
)


# ─── Stored ──────────────────────────────────────────────────────

@dataclass
class ProgressEntry:
    id: UUID
    subject_id: UUID
    category: LifeCategory
    score: int
    entry_date: date
    notes: str | None
    created_at: datetime
    updated_at: datetime


@dataclass
class Suggestion:
    subject_id: UUID
    category: LifeCategory
    text: str
    suggestion_type: SuggestionType
    priority: int
    based_on_score: float
    created_at: datetime
    expires_at: datetime
    is_active: bool = True
    applied_at: datetime | None = None
    metadata: dict = field(default_factory=dict)
    id: UUID | None = None

    def is_live(self, now: datetime) -> bool:
        """Active and not yet expired. Expiry is a read-time filter only."""
        return self.is_active and self.expires_at > now


@dataclass
class Mission:
    subject_id: UUID
    title: str
    description: str
    category: LifeCategory
    difficulty: MissionDifficulty
    xp_reward: int
    source_suggestion_id: UUID | None = None
    suggestion_reason: str | None = None
    is_suggestion: bool = True
    completion_status: CompletionStatus = CompletionStatus.PENDING
    created_at: datetime | None = None
    id: UUID | None = None


# ─── Derived ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class CategoryProgress:
    category: LifeCategory
    average_score: float
    latest_score: int
    trend: Trend


@dataclass(frozen=True)
class OverallProgress:
    overall_score: float
    category_scores: list[CategoryProgress]
    computed_at: datetime


@dataclass(frozen=True)
class ImbalancedCategory:
    category: LifeCategory
    average_score: float
    latest_score: int
    severity: ImbalanceSeverity
