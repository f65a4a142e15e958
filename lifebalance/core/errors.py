"""Error Hierarchy — typed, categorized exceptions for all life-balance failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised before any persistence attempt
    - Store errors (500-level) are propagated unchanged — never swallowed
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with LifeBalanceError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - PartialApplyError carries both ids so the caller can retry the apply flow
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

PARTIAL_APPLY_RETRY_MS = 1000


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    subject_id: str | None = None
    category: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class LifeBalanceError(Exception):
    """Base exception for all life-balance errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "subject_id": self.context.subject_id,
                    "category": self.context.category,
                    "retry_after_ms": self.context.retry_after_ms,
                    "details": self.context.debug_info,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(LifeBalanceError):
    """Input rejected before persistence (score, category, identifier, window)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(LifeBalanceError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class SuggestionNotApplicableError(LifeBalanceError):
    """Suggestion is expired, or was retired without producing a mission."""
    def __init__(self, suggestion_id: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Suggestion '{suggestion_id}' cannot be applied: {reason}",
            "SUGGESTION_NOT_APPLICABLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.suggestion_id = suggestion_id
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(LifeBalanceError):
    """Repository operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class PartialApplyError(LifeBalanceError):
    """Mission was written but the suggestion could not be retired.

    Retrying apply_from_suggestion with the same ids completes the flow:
    the mission is found by suggestion id and only deactivation re-runs.
    """
    def __init__(
        self,
        suggestion_id: str,
        mission_id: str,
        cause: LifeBalanceError,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = ctx.retry_after_ms or PARTIAL_APPLY_RETRY_MS
        ctx.debug_info = {
            "suggestion_id": suggestion_id,
            "mission_id": mission_id,
            "failed_step": "deactivate_suggestion",
            "retryable": True,
        }
        super().__init__(
            f"Mission {mission_id} created but suggestion {suggestion_id} "
            f"was not retired: {cause.message}",
            "PARTIAL_APPLY", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.suggestion_id = suggestion_id
        self.mission_id = mission_id
        self.cause = cause
