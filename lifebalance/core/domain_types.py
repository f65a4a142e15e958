"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SubjectId, EntryId, SuggestionId, MissionId wrap UUIDs — never use bare UUID in domain logic
    - SatisfactionScore is bounded 1–100 (checked in core/validate_progress.py)
    - All valid states encoded as Enums — no raw string matching
    - LifeCategory is a closed set of exactly seven tags

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and persist to String columns without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SubjectId = NewType("SubjectId", UUID)
EntryId = NewType("EntryId", UUID)
SuggestionId = NewType("SuggestionId", UUID)
MissionId = NewType("MissionId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

SatisfactionScore = NewType("SatisfactionScore", int)   # 1–100

MIN_SCORE: int = 1
MAX_SCORE: int = 100


# ─── Enums ───────────────────────────────────────────────────────

class LifeCategory(str, Enum):
    """The seven life domains tracked per subject. Order is canonical."""
    SPIRITUAL = "spiritual"
    HEALTH = "health"
    WEALTH = "wealth"
    SERVICE = "service"
    EDUCATION = "education"
    FAMILY = "family"
    SOCIAL = "social"


class Trend(str, Enum):
    """Direction of the latest score relative to its rolling average."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ImbalanceSeverity(str, Enum):
    """Severity buckets — rank() orders them, higher is more severe."""
    CRITICAL = "critical"
    MODERATE = "moderate"
    MILD = "mild"
    BALANCED = "balanced"

    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    ImbalanceSeverity.BALANCED: 0,
    ImbalanceSeverity.MILD: 1,
    ImbalanceSeverity.MODERATE: 2,
    ImbalanceSeverity.CRITICAL: 3,
}


class SuggestionType(str, Enum):
    DAILY_MISSION = "daily_mission"
    WEEKLY_GOAL = "weekly_goal"
    HABIT_CHANGE = "habit_change"
    RESOURCE = "resource"


class MissionDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class CompletionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


# ─── Display Metadata ────────────────────────────────────────────

CATEGORY_LABELS: dict[LifeCategory, str] = {
    LifeCategory.SPIRITUAL: "Spiritual",
    LifeCategory.HEALTH: "Health",
    LifeCategory.WEALTH: "Wealth",
    LifeCategory.SERVICE: "Service",
    LifeCategory.EDUCATION: "Education",
    LifeCategory.FAMILY: "Family",
    LifeCategory.SOCIAL: "Social",
}

CATEGORY_COLORS: dict[LifeCategory, str] = {
    LifeCategory.SPIRITUAL: "#9333EA",  # purple
    LifeCategory.HEALTH: "#10B981",     # green
    LifeCategory.WEALTH: "#F59E0B",     # amber
    LifeCategory.SERVICE: "#3B82F6",    # blue
    LifeCategory.EDUCATION: "#EF4444",  # red
    LifeCategory.FAMILY: "#EC4899",     # pink
    LifeCategory.SOCIAL: "#8B5CF6",     # violet
}


def category_label(category: LifeCategory) -> str:
    return CATEGORY_LABELS[category]


def category_color(category: LifeCategory) -> str:
    return CATEGORY_COLORS[category]
