"""Progress Schemas — Pydantic models for entry, progress and imbalance endpoints.

Invariants:
    - EntryUpsert.score: integer 1–100; notes: at most 2000 chars, stripped
    - Responses are built from core records (from_attributes), never from ORM rows
    - ImbalanceResponse carries display label and color next to the severity

Design Decisions:
    - category typed as LifeCategory: unknown tags rejected by Pydantic at the boundary,
      core validation still runs for non-HTTP callers
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from lifebalance.core.domain_types import (
    LifeCategory, Trend, ImbalanceSeverity, MIN_SCORE, MAX_SCORE,
)
from lifebalance.core.classify_imbalance import severity_label, severity_color
from lifebalance.core.records import ImbalancedCategory


class EntryUpsert(BaseModel):
    """Daily entry write — one category, one score."""
    category: LifeCategory
    score: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    entry_date: date | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class EntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    subject_id: UUID
    category: LifeCategory
    score: int
    entry_date: date
    notes: str | None
    created_at: datetime
    updated_at: datetime


class CategoryAverageResponse(BaseModel):
    category: LifeCategory
    window_days: int
    average_score: float


class CategoryProgressResponse(BaseModel):
    model_config = {"from_attributes": True}

    category: LifeCategory
    average_score: float
    latest_score: int
    trend: Trend


class OverallProgressResponse(BaseModel):
    model_config = {"from_attributes": True}

    overall_score: float
    category_scores: list[CategoryProgressResponse]
    computed_at: datetime


class ImbalanceResponse(BaseModel):
    category: LifeCategory
    average_score: float
    latest_score: int
    severity: ImbalanceSeverity
    severity_label: str
    severity_color: str

    @classmethod
    def from_record(cls, record: ImbalancedCategory) -> "ImbalanceResponse":
        return cls(
            category=record.category,
            average_score=record.average_score,
            latest_score=record.latest_score,
            severity=record.severity,
            severity_label=severity_label(record.severity),
            severity_color=severity_color(record.severity),
        )


class CategoryInfo(BaseModel):
    """Display metadata for one life category."""
    category: LifeCategory
    label: str
    color: str
