"""Suggestions & Missions — generate, list and apply suggestions; list category missions.

Invariants:
    - POST .../generate is safe to repeat: covered categories are skipped
    - POST .../apply is safe to retry: the same mission is returned
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from lifebalance.api.dependencies import get_engine
from lifebalance.core.domain_types import LifeCategory
from lifebalance.schemas.suggestion import (
    SuggestionResponse, GenerateResponse, MissionResponse,
)
from lifebalance.services.engine import LifeBalanceEngine

router = APIRouter(prefix="/api/v1/subjects/{subject_id}", tags=["suggestions"])


@router.post(
    "/suggestions/generate", response_model=GenerateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_suggestions(
    subject_id: UUID, engine: LifeBalanceEngine = Depends(get_engine),
):
    created = await engine.suggestions.generate(subject_id)
    return GenerateResponse(created=created)


@router.get("/suggestions", response_model=list[SuggestionResponse])
async def list_active_suggestions(
    subject_id: UUID,
    category: LifeCategory | None = Query(None),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    suggestions = await engine.suggestions.list_active(subject_id, category)
    return [SuggestionResponse.model_validate(s) for s in suggestions]


@router.post(
    "/suggestions/{suggestion_id}/apply", response_model=MissionResponse,
)
async def apply_suggestion(
    subject_id: UUID,
    suggestion_id: UUID,
    engine: LifeBalanceEngine = Depends(get_engine),
):
    """Turn a suggestion into a mission and retire the suggestion."""
    mission = await engine.missions.apply_from_suggestion(subject_id, suggestion_id)
    return MissionResponse.model_validate(mission)


@router.get("/missions", response_model=list[MissionResponse])
async def list_missions(
    subject_id: UUID,
    category: LifeCategory | None = Query(None),
    include_completed: bool = Query(False),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    missions = await engine.missions.list_missions(
        subject_id, category, include_completed,
    )
    return [MissionResponse.model_validate(m) for m in missions]
