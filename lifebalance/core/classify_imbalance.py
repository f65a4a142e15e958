"""Imbalance Classification — severity buckets from short-window averages. Pure, no IO.

Invariants:
    - Cutoffs are fixed and monotone: a lower average never maps to a less severe bucket
    - average < CRITICAL_BELOW (25)                 -> critical
    - CRITICAL_BELOW <= average < MODERATE_BELOW (40) -> moderate
    - MODERATE_BELOW <= average < threshold          -> mild
    - average >= threshold                           -> balanced (excluded from results)
    - Result ordering: severity descending, ties by category tag

Design Decisions:
    - The caller's threshold only decides inclusion; the critical/moderate cutoffs
      never move, so severity means the same thing across thresholds
    - A category with no entries in the window averages 0 and is therefore critical
"""

from lifebalance.core.domain_types import ImbalanceSeverity
from lifebalance.core.records import ImbalancedCategory, CategoryProgress


CRITICAL_BELOW: float = 25.0
MODERATE_BELOW: float = 40.0

SEVERITY_LABELS: dict[ImbalanceSeverity, str] = {
    ImbalanceSeverity.CRITICAL: "Needs Immediate Attention",
    ImbalanceSeverity.MODERATE: "Needs Improvement",
    ImbalanceSeverity.MILD: "Minor Imbalance",
    ImbalanceSeverity.BALANCED: "Balanced",
}

SEVERITY_COLORS: dict[ImbalanceSeverity, str] = {
    ImbalanceSeverity.CRITICAL: "#EF4444",  # red
    ImbalanceSeverity.MODERATE: "#F59E0B",  # amber
    ImbalanceSeverity.MILD: "#FBBF24",      # yellow
    ImbalanceSeverity.BALANCED: "#10B981",  # green
}


def classify_severity(average: float, threshold: float) -> ImbalanceSeverity:
    if average >= threshold:
        return ImbalanceSeverity.BALANCED
    if average < CRITICAL_BELOW:
        return ImbalanceSeverity.CRITICAL
    if average < MODERATE_BELOW:
        return ImbalanceSeverity.MODERATE
    return ImbalanceSeverity.MILD


def find_imbalances(
    progress: list[CategoryProgress], threshold: float,
) -> list[ImbalancedCategory]:
    """Keep categories below threshold, most severe first."""
    flagged = [
        ImbalancedCategory(
            category=p.category,
            average_score=p.average_score,
            latest_score=p.latest_score,
            severity=classify_severity(p.average_score, threshold),
        )
        for p in progress
        if p.average_score < threshold
    ]
    return sorted(flagged, key=lambda i: (-i.severity.rank(), i.category.value))


def severity_label(severity: ImbalanceSeverity) -> str:
    return SEVERITY_LABELS[severity]


def severity_color(severity: ImbalanceSeverity) -> str:
    return SEVERITY_COLORS[severity]
