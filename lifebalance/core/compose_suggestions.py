"""Suggestion Composition — ranked remediation suggestions for imbalanced categories. Pure, no IO.

Invariants:
    - Balanced categories never produce suggestions
    - SUGGESTIONS_PER_SEVERITY: critical 3, moderate 2, mild 1
    - priority = SEVERITY_WEIGHT[severity] - rank, so every critical suggestion
      outranks every moderate one, and so on
    - expires_at = now + ttl_days, strictly after created_at
    - Categories listed in `already_covered` are skipped (idempotency guard)

Design Decisions:
    - Templates are ordered per category: rank 0 is the smallest daily step,
      later ranks add weekly goals, habit changes and resources
"""

from datetime import datetime, timedelta
from uuid import UUID

from lifebalance.core.domain_types import (
    LifeCategory, ImbalanceSeverity, SuggestionType,
)
from lifebalance.core.records import ImbalancedCategory, Suggestion


SUGGESTIONS_PER_SEVERITY: dict[ImbalanceSeverity, int] = {
    ImbalanceSeverity.CRITICAL: 3,
    ImbalanceSeverity.MODERATE: 2,
    ImbalanceSeverity.MILD: 1,
    ImbalanceSeverity.BALANCED: 0,
}

SEVERITY_WEIGHT: dict[ImbalanceSeverity, int] = {
    ImbalanceSeverity.CRITICAL: 30,
    ImbalanceSeverity.MODERATE: 20,
    ImbalanceSeverity.MILD: 10,
    ImbalanceSeverity.BALANCED: 0,
}

SUGGESTION_TEMPLATES: dict[LifeCategory, list[tuple[SuggestionType, str]]] = {
    LifeCategory.SPIRITUAL: [
        (SuggestionType.DAILY_MISSION,
         "Spend 10 quiet minutes today in prayer, meditation or reflection."),
        (SuggestionType.WEEKLY_GOAL,
         "Write down three things you are grateful for on four days this week."),
        (SuggestionType.RESOURCE,
         "Pick one book or talk on purpose and meaning and finish it this week."),
    ],
    LifeCategory.HEALTH: [
        (SuggestionType.DAILY_MISSION,
         "Take a 20-minute walk and drink eight glasses of water today."),
        (SuggestionType.HABIT_CHANGE,
         "Set a fixed bedtime and keep screens out of the bedroom for seven nights."),
        (SuggestionType.WEEKLY_GOAL,
         "Plan three home-cooked meals with vegetables this week."),
    ],
    LifeCategory.WEALTH: [
        (SuggestionType.DAILY_MISSION,
         "Record every expense you make today."),
        (SuggestionType.WEEKLY_GOAL,
         "Draft a simple monthly budget and set aside a fixed amount to save."),
        (SuggestionType.RESOURCE,
         "Complete one short lesson on personal finance basics."),
    ],
    LifeCategory.SERVICE: [
        (SuggestionType.DAILY_MISSION,
         "Do one unprompted act of kindness for someone today."),
        (SuggestionType.WEEKLY_GOAL,
         "Offer an hour of help to a classmate, neighbour or local group this week."),
        (SuggestionType.HABIT_CHANGE,
         "Ask one person each day how you can help them."),
    ],
    LifeCategory.EDUCATION: [
        (SuggestionType.DAILY_MISSION,
         "Finish one lesson or 30 minutes of focused study today."),
        (SuggestionType.HABIT_CHANGE,
         "Block the same study slot in your calendar every weekday."),
        (SuggestionType.RESOURCE,
         "Choose a course module you have been postponing and start it."),
    ],
    LifeCategory.FAMILY: [
        (SuggestionType.DAILY_MISSION,
         "Share a meal or a phone call with a family member today."),
        (SuggestionType.WEEKLY_GOAL,
         "Plan one shared activity with your family this week."),
        (SuggestionType.HABIT_CHANGE,
         "Keep phones off the table during family meals."),
    ],
    LifeCategory.SOCIAL: [
        (SuggestionType.DAILY_MISSION,
         "Message a friend you have not spoken to in a while."),
        (SuggestionType.WEEKLY_GOAL,
         "Join a study room, club or community event this week."),
        (SuggestionType.RESOURCE,
         "Introduce yourself to one new person in the community hub."),
    ],
}


def compose_suggestions(
    subject_id: UUID,
    imbalance: ImbalancedCategory,
    now: datetime,
    ttl_days: int,
    threshold: float,
    window_days: int,
) -> list[Suggestion]:
    """Build the ranked suggestions for one imbalanced category."""
    count = SUGGESTIONS_PER_SEVERITY[imbalance.severity]
    templates = SUGGESTION_TEMPLATES[imbalance.category][:count]
    expires_at = now + timedelta(days=ttl_days)
    return [
        Suggestion(
            subject_id=subject_id,
            category=imbalance.category,
            text=text,
            suggestion_type=suggestion_type,
            priority=SEVERITY_WEIGHT[imbalance.severity] - rank,
            based_on_score=imbalance.average_score,
            created_at=now,
            expires_at=expires_at,
            metadata={
                "severity": imbalance.severity.value,
                "threshold": threshold,
                "window_days": window_days,
                "latest_score": imbalance.latest_score,
                "template_rank": rank,
            },
        )
        for rank, (suggestion_type, text) in enumerate(templates)
    ]


def plan_suggestions(
    subject_id: UUID,
    imbalances: list[ImbalancedCategory],
    already_covered: set[LifeCategory],
    now: datetime,
    ttl_days: int,
    threshold: float,
    window_days: int,
) -> list[Suggestion]:
    """All new suggestions for one generation pass, skipping covered categories."""
    planned: list[Suggestion] = []
    for imbalance in imbalances:
        if imbalance.category in already_covered:
            continue
        planned.extend(compose_suggestions(
            subject_id, imbalance, now, ttl_days, threshold, window_days,
        ))
    return planned
