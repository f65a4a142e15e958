"""Progress Aggregator — rolling category averages, trends and the overall score.

Invariants:
    - Read-only: never writes to the repository
    - Total over all seven categories: missing data yields 0-valued aggregates
    - overall_score is the equal-weight mean of the seven category averages

Design Decisions:
    - One range query per window plus one latest-entry query per category;
      queries run sequentially because an AsyncSession is not concurrency-safe
    - Arithmetic delegated to core/compute_progress.py (pure, tested without IO)
"""

from uuid import UUID

from lifebalance.core.domain_types import LifeCategory, Trend
from lifebalance.core.records import CategoryProgress, OverallProgress
from lifebalance.core.repository_protocols import EntryRepository
from lifebalance.core.compute_progress import (
    window_bounds, category_average, calculate_trend,
    build_category_progress, build_overall_progress,
)
from lifebalance.core.validate_progress import (
    parse_category, require_identifier, check_window,
)
from lifebalance.services.clock import Clock, utc_now

DEFAULT_WINDOW_DAYS = 30


class ProgressAggregator:
    def __init__(
        self,
        repo: EntryRepository,
        clock: Clock = utc_now,
        default_window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        self.repo = repo
        self.clock = clock
        self.default_window_days = default_window_days

    async def category_average(
        self,
        subject_id: UUID | str,
        category: LifeCategory | str,
        window_days: int | None = None,
    ) -> float:
        """Mean score inside the trailing window; 0.0 when there is no data."""
        subject = require_identifier("subject_id", subject_id)
        cat = parse_category(category)
        window = check_window(
            self.default_window_days if window_days is None else window_days,
        )
        today = self.clock().date()
        start, end = window_bounds(today, window)
        entries = await self.repo.query_entries(subject, start, end, cat)
        return category_average(entries, cat, today, window)

    @staticmethod
    def trend(average: float, latest: float) -> Trend:
        return calculate_trend(average, latest)

    async def category_progress(
        self,
        subject_id: UUID | str,
        category: LifeCategory | str,
        window_days: int | None = None,
    ) -> CategoryProgress:
        subject = require_identifier("subject_id", subject_id)
        cat = parse_category(category)
        average = await self.category_average(subject, cat, window_days)
        latest = await self.repo.query_latest_entry(subject, cat)
        return build_category_progress(cat, average, latest)

    async def progress_for_window(
        self, subject_id: UUID | str, window_days: int | None = None,
    ) -> list[CategoryProgress]:
        """CategoryProgress for all seven categories, in canonical order."""
        subject = require_identifier("subject_id", subject_id)
        window = check_window(
            self.default_window_days if window_days is None else window_days,
        )
        today = self.clock().date()
        start, end = window_bounds(today, window)
        entries = await self.repo.query_entries(subject, start, end)

        progress = []
        for cat in LifeCategory:
            latest = await self.repo.query_latest_entry(subject, cat)
            average = category_average(entries, cat, today, window)
            progress.append(build_category_progress(cat, average, latest))
        return progress

    async def overall_progress(
        self, subject_id: UUID | str, window_days: int | None = None,
    ) -> OverallProgress:
        category_scores = await self.progress_for_window(subject_id, window_days)
        return build_overall_progress(category_scores, self.clock())
