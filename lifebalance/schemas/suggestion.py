"""Suggestion & Mission Schemas — Pydantic responses for the suggestion lifecycle.

Invariants:
    - SuggestionResponse mirrors the Suggestion record, metadata passed through as-is
    - MissionResponse exposes the link back to the originating suggestion
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from lifebalance.core.domain_types import (
    LifeCategory, SuggestionType, MissionDifficulty, CompletionStatus,
)


class SuggestionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    subject_id: UUID
    category: LifeCategory
    text: str
    suggestion_type: SuggestionType
    priority: int
    based_on_score: float
    is_active: bool
    applied_at: datetime | None
    created_at: datetime
    expires_at: datetime
    metadata: dict


class GenerateResponse(BaseModel):
    created: int


class MissionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    subject_id: UUID
    source_suggestion_id: UUID | None
    title: str
    description: str
    category: LifeCategory
    difficulty: MissionDifficulty
    xp_reward: int
    is_suggestion: bool
    suggestion_reason: str | None
    completion_status: CompletionStatus
    created_at: datetime | None
