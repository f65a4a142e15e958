"""Imbalance Classifier — categories whose short-window average falls below a threshold.

Invariants:
    - Read-only: reuses ProgressAggregator, never writes
    - Results ordered most severe first, ties by category tag
    - Severity cutoffs live in core/classify_imbalance.py (single source of truth)
"""

from uuid import UUID

from lifebalance.core.domain_types import ImbalanceSeverity
from lifebalance.core.records import ImbalancedCategory
from lifebalance.core.classify_imbalance import (
    find_imbalances, severity_label, severity_color,
)
from lifebalance.core.validate_progress import check_threshold, check_window
from lifebalance.services.progress_aggregator import ProgressAggregator

DEFAULT_THRESHOLD = 50.0
DEFAULT_WINDOW_DAYS = 7


class ImbalanceClassifier:
    def __init__(
        self,
        aggregator: ProgressAggregator,
        default_threshold: float = DEFAULT_THRESHOLD,
        default_window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        self.aggregator = aggregator
        self.default_threshold = default_threshold
        self.default_window_days = default_window_days

    async def imbalanced_categories(
        self,
        subject_id: UUID | str,
        threshold: float | None = None,
        window_days: int | None = None,
    ) -> list[ImbalancedCategory]:
        limit = check_threshold(
            self.default_threshold if threshold is None else threshold,
        )
        window = check_window(
            self.default_window_days if window_days is None else window_days,
        )
        progress = await self.aggregator.progress_for_window(subject_id, window)
        return find_imbalances(progress, limit)

    @staticmethod
    def severity_label(severity: ImbalanceSeverity) -> str:
        return severity_label(severity)

    @staticmethod
    def severity_color(severity: ImbalanceSeverity) -> str:
        return severity_color(severity)
