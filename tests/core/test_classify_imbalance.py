"""Imbalance Classification — cutoffs, monotonicity, inclusion and ordering."""

import pytest

from lifebalance.core.domain_types import LifeCategory, ImbalanceSeverity, Trend
from lifebalance.core.records import CategoryProgress
from lifebalance.core.classify_imbalance import (
    classify_severity, find_imbalances, severity_label, severity_color,
    CRITICAL_BELOW, MODERATE_BELOW,
)


@pytest.mark.parametrize("average,expected", [
    (0, ImbalanceSeverity.CRITICAL),
    (24.99, ImbalanceSeverity.CRITICAL),
    (25, ImbalanceSeverity.MODERATE),
    (39.99, ImbalanceSeverity.MODERATE),
    (40, ImbalanceSeverity.MILD),
    (49.99, ImbalanceSeverity.MILD),
    (50, ImbalanceSeverity.BALANCED),
    (100, ImbalanceSeverity.BALANCED),
])
def test_classify_severity_cutoffs_at_default_threshold(average, expected):
    assert classify_severity(average, 50) == expected


def test_classify_severity_is_monotone():
    previous = ImbalanceSeverity.CRITICAL.rank()
    for tenth in range(0, 1001):
        rank = classify_severity(tenth / 10, 50).rank()
        assert rank <= previous
        previous = rank


def test_cutoffs_do_not_move_with_threshold():
    assert classify_severity(CRITICAL_BELOW - 1, 80) == ImbalanceSeverity.CRITICAL
    assert classify_severity(MODERATE_BELOW - 1, 80) == ImbalanceSeverity.MODERATE
    assert classify_severity(70, 80) == ImbalanceSeverity.MILD
    assert classify_severity(30, 30) == ImbalanceSeverity.BALANCED


def _progress(averages: dict[LifeCategory, float]) -> list[CategoryProgress]:
    return [
        CategoryProgress(c, averages.get(c, 100.0), 0, Trend.STABLE)
        for c in LifeCategory
    ]


def test_find_imbalances_scenario_returns_three_most_severe_first():
    progress = _progress({
        LifeCategory.SPIRITUAL: 20, LifeCategory.HEALTH: 70,
        LifeCategory.WEALTH: 65, LifeCategory.SERVICE: 60,
        LifeCategory.EDUCATION: 55, LifeCategory.FAMILY: 35,
        LifeCategory.SOCIAL: 45,
    })
    result = find_imbalances(progress, 50)
    assert [i.category for i in result] == [
        LifeCategory.SPIRITUAL, LifeCategory.FAMILY, LifeCategory.SOCIAL,
    ]
    assert [i.severity for i in result] == [
        ImbalanceSeverity.CRITICAL, ImbalanceSeverity.MODERATE, ImbalanceSeverity.MILD,
    ]


def test_find_imbalances_breaks_ties_by_category_tag():
    progress = _progress({
        LifeCategory.WEALTH: 10, LifeCategory.FAMILY: 20, LifeCategory.HEALTH: 5,
    })
    result = find_imbalances(progress, 50)
    assert [i.category.value for i in result] == ["family", "health", "wealth"]


def test_find_imbalances_excludes_average_equal_to_threshold():
    assert find_imbalances(_progress({LifeCategory.SOCIAL: 50}), 50) == []


def test_severity_display_metadata():
    assert severity_label(ImbalanceSeverity.CRITICAL) == "Needs Immediate Attention"
    assert severity_label(ImbalanceSeverity.BALANCED) == "Balanced"
    assert severity_color(ImbalanceSeverity.MILD) == "#FBBF24"
