"""Entry Store — upsert semantics, validation-before-persistence and entry queries."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from lifebalance.core.domain_types import LifeCategory
from lifebalance.core.errors import InputValidationError, ResourceNotFoundError

from tests.services.fixed_clock import NOW, TODAY


@pytest.mark.parametrize("score", [1, 37, 100])
async def test_upsert_then_latest_returns_same_score(engine, subject_id, score):
    await engine.entries.upsert(subject_id, "health", score)
    latest = await engine.entries.query_latest(subject_id, "health")
    assert latest is not None
    assert latest.score == score
    assert latest.entry_date == TODAY


async def test_same_day_upserts_leave_one_entry_with_last_value(engine, subject_id):
    first = await engine.entries.upsert(subject_id, "wealth", 40, notes="first")
    await engine.entries.upsert(subject_id, "wealth", 55)
    last = await engine.entries.upsert(subject_id, "wealth", 62, notes="third")

    entries = await engine.entries.query_by_category(subject_id, "wealth")
    assert len(entries) == 1
    assert entries[0].score == 62
    assert entries[0].notes == "third"
    assert last.id == first.id


async def test_upsert_on_different_days_appends(engine, subject_id):
    await engine.entries.upsert(subject_id, "family", 50, TODAY - timedelta(days=1))
    await engine.entries.upsert(subject_id, "family", 60, TODAY)
    entries = await engine.entries.query_by_category(subject_id, "family")
    assert [e.score for e in entries] == [60, 50]


@pytest.mark.parametrize("category,score", [
    ("health", 0), ("health", 101), ("career", 50),
])
async def test_invalid_input_is_rejected_before_persistence(
    engine, subject_id, category, score,
):
    with pytest.raises(InputValidationError):
        await engine.entries.upsert(subject_id, category, score)
    assert await engine.entries.query_today(subject_id) == []


async def test_missing_subject_is_rejected(engine):
    with pytest.raises(InputValidationError) as exc:
        await engine.entries.upsert("", "health", 50)
    assert exc.value.field == "subject_id"


async def test_blank_notes_are_stored_as_none(engine, subject_id):
    entry = await engine.entries.upsert(subject_id, "social", 50, notes="   ")
    assert entry.notes is None


async def test_date_range_is_inclusive_and_newest_first(engine, subject_id):
    for offset in range(5):
        await engine.entries.upsert(
            subject_id, "education", 50 + offset, TODAY - timedelta(days=offset),
        )
    entries = await engine.entries.query_by_date_range(
        subject_id, TODAY - timedelta(days=3), TODAY - timedelta(days=1),
    )
    assert [e.entry_date for e in entries] == [
        TODAY - timedelta(days=1), TODAY - timedelta(days=2), TODAY - timedelta(days=3),
    ]


async def test_inverted_date_range_is_rejected(engine, subject_id):
    with pytest.raises(InputValidationError):
        await engine.entries.query_by_date_range(
            subject_id, date(2026, 10, 19), date(2026, 10, 1),
        )


async def test_query_today_returns_only_todays_entries(engine, subject_id):
    await engine.entries.upsert(subject_id, "health", 70)
    await engine.entries.upsert(subject_id, "service", 40)
    await engine.entries.upsert(subject_id, "health", 20, TODAY - timedelta(days=1))
    today = await engine.entries.query_today(subject_id)
    assert {(e.category, e.score) for e in today} == {
        (LifeCategory.HEALTH, 70), (LifeCategory.SERVICE, 40),
    }


async def test_query_by_category_respects_limit(engine, subject_id):
    for offset in range(4):
        await engine.entries.upsert(
            subject_id, "spiritual", 30, TODAY - timedelta(days=offset),
        )
    assert len(await engine.entries.query_by_category(subject_id, "spiritual", 2)) == 2


async def test_latest_is_none_without_entries(engine, subject_id):
    assert await engine.entries.query_latest(subject_id, "social") is None


async def test_entries_are_scoped_by_subject(engine, subject_id):
    await engine.entries.upsert(subject_id, "health", 70)
    assert await engine.entries.query_today(uuid4()) == []


async def test_delete_entry(engine, subject_id):
    entry = await engine.entries.upsert(subject_id, "health", 70)
    await engine.entries.delete(entry.id)
    assert await engine.entries.query_latest(subject_id, "health") is None


async def test_delete_unknown_entry_raises_not_found(engine):
    with pytest.raises(ResourceNotFoundError):
        await engine.entries.delete(uuid4())


async def test_timestamps_follow_the_injected_clock(engine, subject_id, clock):
    clock.advance(days=-400)
    entry = await engine.entries.upsert(subject_id, "education", 60)
    assert entry.entry_date == (NOW - timedelta(days=400)).date()
    assert entry.created_at == clock()

    clock.advance(hours=2)
    updated = await engine.entries.upsert(
        subject_id, "education", 70, entry_date=entry.entry_date,
    )
    assert updated.created_at == NOW - timedelta(days=400)
    assert updated.updated_at == clock()
