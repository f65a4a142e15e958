"""Progress Computation — averages, trailing window, trend dead-band and overall score."""

from datetime import date, datetime, timezone
from uuid import uuid4

from lifebalance.core.domain_types import LifeCategory, Trend
from lifebalance.core.records import ProgressEntry, CategoryProgress
from lifebalance.core.compute_progress import (
    window_bounds, average_score, category_average, calculate_trend,
    build_category_progress, overall_score, build_overall_progress,
)

TODAY = date(2026, 10, 19)
STAMP = datetime(2026, 10, 19, tzinfo=timezone.utc)


def _entry(category: LifeCategory, score: int, day: date) -> ProgressEntry:
    return ProgressEntry(
        id=uuid4(), subject_id=uuid4(), category=category, score=score,
        entry_date=day, notes=None, created_at=STAMP, updated_at=STAMP,
    )


# ─── window / average ───────────────────────────────────────────

def test_window_of_seven_days_includes_today():
    assert window_bounds(TODAY, 7) == (date(2026, 10, 13), TODAY)
    assert window_bounds(TODAY, 1) == (TODAY, TODAY)


def test_average_of_nothing_is_zero():
    assert average_score([]) == 0.0


def test_average_rounds_to_two_decimals():
    assert average_score([10, 20, 20]) == 16.67


def test_category_average_ignores_other_categories_and_old_entries():
    entries = [
        _entry(LifeCategory.HEALTH, 80, TODAY),
        _entry(LifeCategory.HEALTH, 60, date(2026, 10, 13)),
        _entry(LifeCategory.HEALTH, 10, date(2026, 10, 12)),   # outside 7 days
        _entry(LifeCategory.WEALTH, 5, TODAY),
    ]
    assert category_average(entries, LifeCategory.HEALTH, TODAY, 7) == 70.0
    assert category_average(entries, LifeCategory.FAMILY, TODAY, 7) == 0.0


# ─── trend ──────────────────────────────────────────────────────

def test_trend_within_dead_band_is_stable():
    assert calculate_trend(60, 64) == Trend.STABLE
    assert calculate_trend(60, 56) == Trend.STABLE


def test_trend_above_dead_band_is_up():
    assert calculate_trend(60, 70) == Trend.UP


def test_trend_below_dead_band_is_down():
    assert calculate_trend(60, 50) == Trend.DOWN


def test_trend_at_exactly_five_leaves_dead_band():
    assert calculate_trend(60, 65) == Trend.UP
    assert calculate_trend(60, 55) == Trend.DOWN


def test_category_progress_without_entries_is_zero_and_stable():
    progress = build_category_progress(LifeCategory.SOCIAL, 0.0, None)
    assert progress.latest_score == 0
    assert progress.trend == Trend.STABLE


# ─── overall ────────────────────────────────────────────────────

def test_overall_score_is_mean_of_seven_averages():
    assert overall_score([80, 70, 60, 50, 40, 30, 20]) == 50.0


def test_overall_score_counts_empty_categories_as_zero():
    assert overall_score([70, 0, 0, 0, 0, 0, 0]) == 10.0


def test_build_overall_progress_keeps_category_order():
    scores = [
        CategoryProgress(c, avg, int(avg), Trend.STABLE)
        for c, avg in zip(LifeCategory, [80, 70, 60, 50, 40, 30, 20])
    ]
    overall = build_overall_progress(scores, STAMP)
    assert overall.overall_score == 50.0
    assert [c.category for c in overall.category_scores] == list(LifeCategory)
    assert overall.computed_at == STAMP
