"""SQL Repository — SQLAlchemy implementation of the ProgressRepository protocol.

Invariants:
    - upsert_entry is one INSERT ... ON CONFLICT DO UPDATE statement: concurrent
      same-day writes resolve to last-write-wins, never to duplicate rows
    - insert_mission is idempotent on source_suggestion_id: a duplicate insert
      returns the mission that won the race
    - Every SQLAlchemyError is rolled back and re-raised as StoreError
    - Datetimes leave this module timezone-aware (UTC), whatever the backend returns

Design Decisions:
    - Dialect-specific insert (postgresql / sqlite) chosen from the bound engine:
      both expose on_conflict_do_update with the same signature
    - populate_existing on re-reads: the Core upsert bypasses the identity map
    - Each write commits: services compose writes, they never hold a transaction open
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import select, update, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lifebalance.core.domain_types import (
    LifeCategory, SuggestionType, MissionDifficulty, CompletionStatus,
)
from lifebalance.core.errors import StoreError, ResourceNotFoundError
from lifebalance.core.records import ProgressEntry, Suggestion, Mission
from lifebalance.models.progress_entry import ProgressEntryRow
from lifebalance.models.suggestion import SuggestionRow
from lifebalance.models.mission import MissionRow

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _aware(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on DateTime(timezone=True); stored values are UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _to_entry(row: ProgressEntryRow) -> ProgressEntry:
    return ProgressEntry(
        id=row.id,
        subject_id=row.subject_id,
        category=LifeCategory(row.category),
        score=row.satisfaction_score,
        entry_date=row.entry_date,
        notes=row.notes,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _to_suggestion(row: SuggestionRow) -> Suggestion:
    return Suggestion(
        id=row.id,
        subject_id=row.subject_id,
        category=LifeCategory(row.category),
        text=row.suggestion_text,
        suggestion_type=SuggestionType(row.suggestion_type),
        priority=row.priority,
        based_on_score=row.based_on_score,
        is_active=row.is_active,
        applied_at=_aware(row.applied_at),
        created_at=_aware(row.created_at),
        expires_at=_aware(row.expires_at),
        metadata=dict(row.meta or {}),
    )


def _to_mission(row: MissionRow) -> Mission:
    return Mission(
        id=row.id,
        subject_id=row.subject_id,
        source_suggestion_id=row.source_suggestion_id,
        title=row.title,
        description=row.description,
        category=LifeCategory(row.category),
        difficulty=MissionDifficulty(row.difficulty_level),
        xp_reward=row.xp_reward,
        is_suggestion=row.is_suggestion,
        suggestion_reason=row.suggestion_reason,
        completion_status=CompletionStatus(row.completion_status),
        created_at=_aware(row.created_at),
    )


class SqlProgressRepository:
    """Entry, suggestion and mission persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError(type(e).__name__, operation) from e

    # ─── Entries ────────────────────────────────────────────────

    async def upsert_entry(
        self, subject_id: uuid.UUID, category: LifeCategory, score: int,
        entry_date: date, notes: str | None, now: datetime,
    ) -> ProgressEntry:
        async with self._guard("upsert_entry"):
            dialect = self.db.get_bind().dialect.name
            insert_fn = _UPSERT_DIALECTS.get(dialect)
            if insert_fn is None:
                raise StoreError(f"dialect '{dialect}' has no upsert", "upsert_entry")
            stmt = insert_fn(ProgressEntryRow).values(
                id=uuid.uuid4(),
                subject_id=subject_id,
                category=category.value,
                satisfaction_score=score,
                entry_date=entry_date,
                notes=notes,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["subject_id", "category", "entry_date"],
                set_={
                    "satisfaction_score": stmt.excluded.satisfaction_score,
                    "notes": stmt.excluded.notes,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await self.db.execute(stmt)
            await self.db.commit()

            result = await self.db.execute(
                select(ProgressEntryRow)
                .where(ProgressEntryRow.subject_id == subject_id)
                .where(ProgressEntryRow.category == category.value)
                .where(ProgressEntryRow.entry_date == entry_date)
                .execution_options(populate_existing=True)
            )
            return _to_entry(result.scalar_one())

    async def query_entries(
        self, subject_id: uuid.UUID, start: date, end: date,
        category: LifeCategory | None = None,
    ) -> list[ProgressEntry]:
        query = (
            select(ProgressEntryRow)
            .where(ProgressEntryRow.subject_id == subject_id)
            .where(ProgressEntryRow.entry_date >= start)
            .where(ProgressEntryRow.entry_date <= end)
        )
        if category:
            query = query.where(ProgressEntryRow.category == category.value)
        query = query.order_by(
            ProgressEntryRow.entry_date.desc(), ProgressEntryRow.category,
        )
        async with self._guard("query_entries"):
            result = await self.db.execute(
                query.execution_options(populate_existing=True),
            )
            return [_to_entry(r) for r in result.scalars().all()]

    async def query_latest_entry(
        self, subject_id: uuid.UUID, category: LifeCategory,
    ) -> ProgressEntry | None:
        entries = await self.query_entries_by_category(subject_id, category, 1)
        return entries[0] if entries else None

    async def query_entries_by_category(
        self, subject_id: uuid.UUID, category: LifeCategory, limit: int,
    ) -> list[ProgressEntry]:
        async with self._guard("query_entries_by_category"):
            result = await self.db.execute(
                select(ProgressEntryRow)
                .where(ProgressEntryRow.subject_id == subject_id)
                .where(ProgressEntryRow.category == category.value)
                .order_by(
                    ProgressEntryRow.entry_date.desc(),
                    ProgressEntryRow.updated_at.desc(),
                )
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            return [_to_entry(r) for r in result.scalars().all()]

    async def delete_entry(self, entry_id: uuid.UUID) -> bool:
        async with self._guard("delete_entry"):
            result = await self.db.execute(
                delete(ProgressEntryRow).where(ProgressEntryRow.id == entry_id),
            )
            await self.db.commit()
            return result.rowcount > 0

    # ─── Suggestions ────────────────────────────────────────────

    async def list_active_suggestions(
        self, subject_id: uuid.UUID, now: datetime,
        category: LifeCategory | None = None,
    ) -> list[Suggestion]:
        query = (
            select(SuggestionRow)
            .where(SuggestionRow.subject_id == subject_id)
            .where(SuggestionRow.is_active.is_(True))
            .where(SuggestionRow.expires_at > now)
        )
        if category:
            query = query.where(SuggestionRow.category == category.value)
        query = query.order_by(
            SuggestionRow.priority.desc(), SuggestionRow.created_at,
        )
        async with self._guard("list_active_suggestions"):
            result = await self.db.execute(
                query.execution_options(populate_existing=True),
            )
            return [_to_suggestion(r) for r in result.scalars().all()]

    async def get_suggestion(self, suggestion_id: uuid.UUID) -> Suggestion | None:
        async with self._guard("get_suggestion"):
            result = await self.db.execute(
                select(SuggestionRow)
                .where(SuggestionRow.id == suggestion_id)
                .execution_options(populate_existing=True)
            )
            row = result.scalar_one_or_none()
            return _to_suggestion(row) if row else None

    async def insert_suggestion(self, suggestion: Suggestion) -> Suggestion:
        row = SuggestionRow(
            id=suggestion.id or uuid.uuid4(),
            subject_id=suggestion.subject_id,
            category=suggestion.category.value,
            suggestion_text=suggestion.text,
            suggestion_type=suggestion.suggestion_type.value,
            priority=suggestion.priority,
            based_on_score=suggestion.based_on_score,
            is_active=suggestion.is_active,
            applied_at=suggestion.applied_at,
            created_at=suggestion.created_at,
            expires_at=suggestion.expires_at,
            meta=suggestion.metadata,
        )
        async with self._guard("insert_suggestion"):
            self.db.add(row)
            await self.db.commit()
            return _to_suggestion(row)

    async def deactivate_suggestion(
        self, suggestion_id: uuid.UUID, applied_at: datetime,
    ) -> None:
        async with self._guard("deactivate_suggestion"):
            result = await self.db.execute(
                update(SuggestionRow)
                .where(SuggestionRow.id == suggestion_id)
                .values(is_active=False, applied_at=applied_at)
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("Suggestion", str(suggestion_id))

    # ─── Missions ───────────────────────────────────────────────

    async def insert_mission(self, mission: Mission) -> Mission:
        row = MissionRow(
            id=mission.id or uuid.uuid4(),
            subject_id=mission.subject_id,
            source_suggestion_id=mission.source_suggestion_id,
            title=mission.title,
            description=mission.description,
            category=mission.category.value,
            difficulty_level=mission.difficulty.value,
            xp_reward=mission.xp_reward,
            is_suggestion=mission.is_suggestion,
            suggestion_reason=mission.suggestion_reason,
            completion_status=mission.completion_status.value,
            created_at=mission.created_at or datetime.now(timezone.utc),
        )
        try:
            self.db.add(row)
            await self.db.commit()
            return _to_mission(row)
        except IntegrityError as e:
            await self.db.rollback()
            if mission.source_suggestion_id is None:
                raise StoreError(type(e).__name__, "insert_mission") from e
            existing = await self.get_mission_for_suggestion(
                mission.source_suggestion_id,
            )
            if existing is None:
                raise StoreError(type(e).__name__, "insert_mission") from e
            logger.info(
                "Mission already exists for suggestion",
                extra={
                    "suggestion_id": mission.source_suggestion_id,
                    "mission_id": existing.id,
                },
            )
            return existing
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Store insert_mission failed: {e}")
            raise StoreError(type(e).__name__, "insert_mission") from e

    async def get_mission_for_suggestion(
        self, suggestion_id: uuid.UUID,
    ) -> Mission | None:
        async with self._guard("get_mission_for_suggestion"):
            result = await self.db.execute(
                select(MissionRow)
                .where(MissionRow.source_suggestion_id == suggestion_id)
                .execution_options(populate_existing=True)
            )
            row = result.scalar_one_or_none()
            return _to_mission(row) if row else None

    async def list_missions(
        self, subject_id: uuid.UUID, category: LifeCategory | None = None,
        include_completed: bool = False,
    ) -> list[Mission]:
        query = select(MissionRow).where(MissionRow.subject_id == subject_id)
        if category:
            query = query.where(MissionRow.category == category.value)
        if not include_completed:
            query = query.where(
                MissionRow.completion_status != CompletionStatus.COMPLETED.value,
            )
        query = query.order_by(MissionRow.created_at.desc())
        async with self._guard("list_missions"):
            result = await self.db.execute(
                query.execution_options(populate_existing=True),
            )
            return [_to_mission(r) for r in result.scalars().all()]
