"""Entry Store — validated persistence of daily satisfaction scores.

Invariants:
    - Validation runs before any repository call (nothing is partially applied)
    - One entry per (subject, category, day): upsert overwrites, last write wins
    - entry_date defaults to the clock's current UTC day
    - Blank notes are stored as NULL

Design Decisions:
    - Thin class over EntryRepository: the atomic upsert is the repository's job,
      this layer owns validation and defaults
"""

import logging
from datetime import date
from uuid import UUID

from lifebalance.core.domain_types import LifeCategory
from lifebalance.core.errors import ResourceNotFoundError
from lifebalance.core.records import ProgressEntry
from lifebalance.core.repository_protocols import EntryRepository
from lifebalance.core.validate_progress import (
    parse_category, check_score, require_identifier, check_limit, check_date_range,
)
from lifebalance.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 30


class EntryStore:
    """Upsert and query ProgressEntry rows for one repository."""

    def __init__(self, repo: EntryRepository, clock: Clock = utc_now):
        self.repo = repo
        self.clock = clock

    def today(self) -> date:
        return self.clock().date()

    async def upsert(
        self,
        subject_id: UUID | str,
        category: LifeCategory | str,
        score: int,
        entry_date: date | None = None,
        notes: str | None = None,
    ) -> ProgressEntry:
        """Create or overwrite the entry for (subject, category, day)."""
        subject = require_identifier("subject_id", subject_id)
        cat = parse_category(category)
        check_score(score)
        now = self.clock()
        day = entry_date or now.date()
        cleaned = notes.strip() if notes else None

        entry = await self.repo.upsert_entry(
            subject, cat, score, day, cleaned or None, now,
        )
        logger.info(
            f"Saved {cat.value} score {score} for {day.isoformat()}",
            extra={"subject_id": subject, "category": cat.value, "entry_id": entry.id},
        )
        return entry

    async def query_by_date_range(
        self, subject_id: UUID | str, start: date, end: date,
    ) -> list[ProgressEntry]:
        """Entries with start <= entry_date <= end, newest first."""
        subject = require_identifier("subject_id", subject_id)
        check_date_range(start, end)
        return await self.repo.query_entries(subject, start, end)

    async def query_today(self, subject_id: UUID | str) -> list[ProgressEntry]:
        today = self.today()
        return await self.query_by_date_range(subject_id, today, today)

    async def query_latest(
        self, subject_id: UUID | str, category: LifeCategory | str,
    ) -> ProgressEntry | None:
        subject = require_identifier("subject_id", subject_id)
        return await self.repo.query_latest_entry(subject, parse_category(category))

    async def query_by_category(
        self,
        subject_id: UUID | str,
        category: LifeCategory | str,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[ProgressEntry]:
        subject = require_identifier("subject_id", subject_id)
        return await self.repo.query_entries_by_category(
            subject, parse_category(category), check_limit(limit),
        )

    async def delete(self, entry_id: UUID | str) -> None:
        entry = require_identifier("entry_id", entry_id)
        if not await self.repo.delete_entry(entry):
            raise ResourceNotFoundError("ProgressEntry", str(entry))
        logger.info("Deleted progress entry", extra={"entry_id": entry})
