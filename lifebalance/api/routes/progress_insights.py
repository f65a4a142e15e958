"""Progress Insights — overall progress, category averages, imbalances and category metadata.

Invariants:
    - Read-only endpoints: nothing here writes to the store
    - window_days / threshold fall back to settings when omitted
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from lifebalance.api.dependencies import get_engine
from lifebalance.core.domain_types import LifeCategory, category_label, category_color
from lifebalance.schemas.progress import (
    OverallProgressResponse, CategoryAverageResponse,
    ImbalanceResponse, CategoryInfo,
)
from lifebalance.services.engine import LifeBalanceEngine

router = APIRouter(prefix="/api/v1", tags=["progress"])


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories():
    """The seven life categories with display label and color."""
    return [
        CategoryInfo(
            category=c, label=category_label(c), color=category_color(c),
        )
        for c in LifeCategory
    ]


@router.get(
    "/subjects/{subject_id}/progress", response_model=OverallProgressResponse,
)
async def overall_progress(
    subject_id: UUID,
    window_days: int | None = Query(None, ge=1, le=365),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    progress = await engine.aggregator.overall_progress(subject_id, window_days)
    return OverallProgressResponse.model_validate(progress)


@router.get(
    "/subjects/{subject_id}/progress/{category}/average",
    response_model=CategoryAverageResponse,
)
async def category_average(
    subject_id: UUID,
    category: LifeCategory,
    window_days: int | None = Query(None, ge=1, le=365),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    window = window_days or engine.aggregator.default_window_days
    average = await engine.aggregator.category_average(subject_id, category, window)
    return CategoryAverageResponse(
        category=category, window_days=window, average_score=average,
    )


@router.get(
    "/subjects/{subject_id}/imbalances", response_model=list[ImbalanceResponse],
)
async def imbalanced_categories(
    subject_id: UUID,
    threshold: float | None = Query(None, gt=0, le=100),
    window_days: int | None = Query(None, ge=1, le=365),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    imbalances = await engine.classifier.imbalanced_categories(
        subject_id, threshold, window_days,
    )
    return [ImbalanceResponse.from_record(i) for i in imbalances]
