"""Input Validation — pure checks applied before any repository call.

Invariants:
    - Every function either returns the normalized value or raises InputValidationError
    - No IO: callers validate first, persist second (nothing is ever partially applied)

Design Decisions:
    - Raise instead of returning error dicts: validation failures abort the operation,
      they are not tool feedback
"""

from datetime import date
from uuid import UUID

from lifebalance.core.domain_types import LifeCategory, MIN_SCORE, MAX_SCORE
from lifebalance.core.errors import InputValidationError, ErrorContext


def parse_category(value: LifeCategory | str) -> LifeCategory:
    """Accept a LifeCategory or its tag; reject anything outside the seven."""
    if isinstance(value, LifeCategory):
        return value
    try:
        return LifeCategory(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in LifeCategory)
        raise InputValidationError(
            f"Unknown life category '{value}'. Expected one of: {allowed}",
            "category",
            ErrorContext(category=str(value)),
        )


def check_score(score: int) -> int:
    # bool is an int subclass; True must not pass as a score of 1
    if isinstance(score, bool) or not isinstance(score, int):
        raise InputValidationError(
            f"Score must be an integer, got {type(score).__name__}", "score",
        )
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InputValidationError(
            f"Score {score} outside [{MIN_SCORE}, {MAX_SCORE}]", "score",
        )
    return score


def require_identifier(name: str, value: UUID | str | None) -> UUID:
    """Coerce a required identifier to UUID."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InputValidationError(f"{name} is required", name)
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise InputValidationError(f"{name} '{value}' is not a valid UUID", name)


def check_window(window_days: int) -> int:
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 1:
        raise InputValidationError(
            f"window_days must be a positive integer, got {window_days!r}",
            "window_days",
        )
    return window_days


def check_threshold(threshold: float) -> float:
    if (
        isinstance(threshold, bool)
        or not isinstance(threshold, (int, float))
        or not 0 < threshold <= MAX_SCORE
    ):
        raise InputValidationError(
            f"threshold must be a number in (0, {MAX_SCORE}], got {threshold!r}",
            "threshold",
        )
    return threshold


def check_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InputValidationError(
            f"limit must be an integer >= 1, got {limit!r}", "limit",
        )
    return limit


def check_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise InputValidationError(
            f"start {start.isoformat()} is after end {end.isoformat()}", "start",
        )
    return start, end
