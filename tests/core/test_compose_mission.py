"""Mission Composition — title, description, reward and suggestion link."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from lifebalance.core.domain_types import (
    LifeCategory, SuggestionType, MissionDifficulty, CompletionStatus,
)
from lifebalance.core.records import Suggestion
from lifebalance.core.compose_mission import compose_mission, format_score

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _suggestion(score: float = 20.0) -> Suggestion:
    return Suggestion(
        id=uuid4(),
        subject_id=uuid4(),
        category=LifeCategory.SPIRITUAL,
        text="Spend 10 quiet minutes today in reflection.",
        suggestion_type=SuggestionType.DAILY_MISSION,
        priority=30,
        based_on_score=score,
        created_at=NOW,
        expires_at=NOW + timedelta(days=14),
    )


def test_mission_mirrors_suggestion():
    suggestion = _suggestion()
    mission = compose_mission(suggestion.subject_id, suggestion, 75, NOW)
    assert mission.title == "Improve Spiritual"
    assert mission.description == suggestion.text
    assert mission.category == LifeCategory.SPIRITUAL
    assert mission.difficulty == MissionDifficulty.MEDIUM
    assert mission.xp_reward == 75
    assert mission.source_suggestion_id == suggestion.id
    assert mission.completion_status == CompletionStatus.PENDING
    assert mission.is_suggestion is True
    assert mission.created_at == NOW


def test_suggestion_reason_formats_score_compactly():
    mission = compose_mission(uuid4(), _suggestion(20.0), 75, NOW)
    assert mission.suggestion_reason == "Based on spiritual score of 20"
    assert format_score(42.5) == "42.5"


def test_suggestion_is_live_until_expiry():
    suggestion = _suggestion()
    assert suggestion.is_live(NOW)
    assert not suggestion.is_live(suggestion.expires_at)
    suggestion.is_active = False
    assert not suggestion.is_live(NOW)
