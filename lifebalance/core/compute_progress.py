"""Progress Computation — rolling averages, trend and overall score. Pure, no IO.

Invariants:
    - Empty input yields 0.0, never an error (aggregation is total over sparse history)
    - Trailing window of N days covers [today - (N - 1), today], both ends inclusive
    - Overall score weighs all seven categories equally, regardless of entry counts
    - TREND_DEAD_BAND (5) is single source of truth for the stable cutoff

Design Decisions:
    - Averages rounded to 2 decimals at the edge (average_scores, overall_score);
      the overall mean is taken over the rounded category averages so it matches
      what the caller sees in category_scores
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from lifebalance.core.domain_types import LifeCategory, Trend
from lifebalance.core.records import ProgressEntry, CategoryProgress, OverallProgress


TREND_DEAD_BAND: float = 5.0
SCORE_PRECISION: int = 2


def window_bounds(today: date, window_days: int) -> tuple[date, date]:
    """First and last day of a trailing window ending today."""
    return today - timedelta(days=window_days - 1), today


def average_score(scores: Iterable[int | float]) -> float:
    values = list(scores)
    if not values:
        return 0.0
    return round(sum(values) / len(values), SCORE_PRECISION)


def category_average(
    entries: Iterable[ProgressEntry], category: LifeCategory,
    today: date, window_days: int,
) -> float:
    """Mean score of one category's entries inside the trailing window."""
    start, end = window_bounds(today, window_days)
    return average_score(
        e.score for e in entries
        if e.category == category and start <= e.entry_date <= end
    )


def calculate_trend(average: float, latest: float) -> Trend:
    """Dead-band comparison: |latest - average| < 5 is stable."""
    difference = latest - average
    if abs(difference) < TREND_DEAD_BAND:
        return Trend.STABLE
    return Trend.UP if difference > 0 else Trend.DOWN


def build_category_progress(
    category: LifeCategory, average: float, latest: ProgressEntry | None,
) -> CategoryProgress:
    latest_score = latest.score if latest else 0
    return CategoryProgress(
        category=category,
        average_score=average,
        latest_score=latest_score,
        trend=calculate_trend(average, latest_score),
    )


def overall_score(averages: Sequence[float]) -> float:
    """Arithmetic mean of the category averages (zeros included)."""
    return average_score(averages)


def build_overall_progress(
    category_scores: list[CategoryProgress], computed_at: datetime,
) -> OverallProgress:
    return OverallProgress(
        overall_score=overall_score([c.average_score for c in category_scores]),
        category_scores=category_scores,
        computed_at=computed_at,
    )
