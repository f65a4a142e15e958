"""SQL Repository — upsert atomicity, mission idempotency and timezone handling."""

from datetime import timedelta
from uuid import uuid4

from sqlalchemy import select, func

from lifebalance.core.domain_types import (
    LifeCategory, SuggestionType, MissionDifficulty,
)
from lifebalance.core.records import Mission, Suggestion
from lifebalance.models.progress_entry import ProgressEntryRow

from tests.services.fixed_clock import NOW, TODAY


async def test_upsert_keeps_created_at_and_refreshes_updated_at(repo, test_db):
    subject = uuid4()
    later = NOW + timedelta(hours=3)
    first = await repo.upsert_entry(subject, LifeCategory.HEALTH, 40, TODAY, None, NOW)
    second = await repo.upsert_entry(
        subject, LifeCategory.HEALTH, 90, TODAY, "better", later,
    )

    assert second.id == first.id
    assert second.created_at == NOW
    assert second.updated_at == later
    assert second.score == 90

    count = await test_db.execute(select(func.count(ProgressEntryRow.id)))
    assert count.scalar_one() == 1


async def test_returned_datetimes_are_timezone_aware(repo):
    entry = await repo.upsert_entry(uuid4(), LifeCategory.SOCIAL, 50, TODAY, None, NOW)
    assert entry.created_at.tzinfo is not None


async def test_insert_mission_is_idempotent_per_suggestion(repo):
    subject, suggestion_id = uuid4(), uuid4()

    def _mission():
        return Mission(
            subject_id=subject,
            title="Improve Family",
            description="Share a meal.",
            category=LifeCategory.FAMILY,
            difficulty=MissionDifficulty.MEDIUM,
            xp_reward=75,
            source_suggestion_id=suggestion_id,
            created_at=NOW,
        )

    first = await repo.insert_mission(_mission())
    second = await repo.insert_mission(_mission())
    assert second.id == first.id
    assert len(await repo.list_missions(subject)) == 1


async def test_active_suggestions_exclude_expired_rows(repo):
    subject = uuid4()
    for days in (1, 30):
        await repo.insert_suggestion(Suggestion(
            subject_id=subject,
            category=LifeCategory.WEALTH,
            text=f"expires in {days}",
            suggestion_type=SuggestionType.RESOURCE,
            priority=days,
            based_on_score=30.0,
            created_at=NOW,
            expires_at=NOW + timedelta(days=days),
        ))

    later = NOW + timedelta(days=2)
    active = await repo.list_active_suggestions(subject, later)
    assert [s.text for s in active] == ["expires in 30"]
    assert active[0].expires_at > later
