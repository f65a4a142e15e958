"""Boundary Protocols — contracts between core services and the persistence shell.

Invariants:
    - Services NEVER import a concrete repository — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the shell via dependency injection
    - Implementations raise StoreError on failure; they never return partial results

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      while the pure core functions the services call in between are not
    - upsert_entry must be atomic on (subject_id, category, entry_date)
    - insert_mission must reject a second mission for the same source_suggestion_id
"""

from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from lifebalance.core.domain_types import LifeCategory
from lifebalance.core.records import ProgressEntry, Suggestion, Mission


class EntryRepository(Protocol):
    """Contract for daily progress entry persistence."""
    async def upsert_entry(
        self, subject_id: UUID, category: LifeCategory, score: int,
        entry_date: date, notes: str | None, now: datetime,
    ) -> ProgressEntry: ...
    async def query_entries(
        self, subject_id: UUID, start: date, end: date,
        category: LifeCategory | None = None,
    ) -> list[ProgressEntry]: ...
    async def query_latest_entry(
        self, subject_id: UUID, category: LifeCategory,
    ) -> ProgressEntry | None: ...
    async def query_entries_by_category(
        self, subject_id: UUID, category: LifeCategory, limit: int,
    ) -> list[ProgressEntry]: ...
    async def delete_entry(self, entry_id: UUID) -> bool: ...


class SuggestionRepository(Protocol):
    """Contract for suggestion persistence."""
    async def list_active_suggestions(
        self, subject_id: UUID, now: datetime,
        category: LifeCategory | None = None,
    ) -> list[Suggestion]: ...
    async def get_suggestion(self, suggestion_id: UUID) -> Suggestion | None: ...
    async def insert_suggestion(self, suggestion: Suggestion) -> Suggestion: ...
    async def deactivate_suggestion(
        self, suggestion_id: UUID, applied_at: datetime,
    ) -> None: ...


class MissionRepository(Protocol):
    """Contract for mission persistence."""
    async def insert_mission(self, mission: Mission) -> Mission: ...
    async def get_mission_for_suggestion(
        self, suggestion_id: UUID,
    ) -> Mission | None: ...
    async def list_missions(
        self, subject_id: UUID, category: LifeCategory | None = None,
        include_completed: bool = False,
    ) -> list[Mission]: ...


class ProgressRepository(
    EntryRepository, SuggestionRepository, MissionRepository, Protocol,
):
    """Full store contract — one object satisfying all three capabilities."""
