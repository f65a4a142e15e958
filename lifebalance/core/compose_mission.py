"""Mission Composition — the mission an applied suggestion turns into. Pure, no IO.

Invariants:
    - title is "Improve <Category Label>", description is the suggestion text verbatim
    - difficulty is always medium; xp_reward comes from settings
    - source_suggestion_id links the mission back for idempotent retries
    - created_at is the apply time passed in, never read from a clock here
"""

from datetime import datetime
from uuid import UUID

from lifebalance.core.domain_types import MissionDifficulty, category_label
from lifebalance.core.records import Mission, Suggestion


def format_score(score: float) -> str:
    """60.0 -> '60', 42.5 -> '42.5'."""
    return f"{score:g}"


def compose_mission(
    subject_id: UUID, suggestion: Suggestion, xp_reward: int, now: datetime,
) -> Mission:
    return Mission(
        subject_id=subject_id,
        title=f"Improve {category_label(suggestion.category)}",
        description=suggestion.text,
        category=suggestion.category,
        difficulty=MissionDifficulty.MEDIUM,
        xp_reward=xp_reward,
        source_suggestion_id=suggestion.id,
        suggestion_reason=(
            f"Based on {suggestion.category.value} score of "
            f"{format_score(suggestion.based_on_score)}"
        ),
        is_suggestion=True,
        created_at=now,
    )
