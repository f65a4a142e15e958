"""Progress Entries — daily score upsert and entry queries.

Invariants:
    - PUT is idempotent per (subject, category, day): repeated writes overwrite
    - Listing endpoints return newest entries first
    - /entries/today is declared before /entries/{category} so it is matched first
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from lifebalance.api.dependencies import get_engine
from lifebalance.core.domain_types import LifeCategory
from lifebalance.schemas.progress import EntryUpsert, EntryResponse
from lifebalance.services.engine import LifeBalanceEngine

router = APIRouter(prefix="/api/v1", tags=["entries"])


@router.put(
    "/subjects/{subject_id}/entries", response_model=EntryResponse,
)
async def upsert_entry(
    subject_id: UUID,
    body: EntryUpsert,
    engine: LifeBalanceEngine = Depends(get_engine),
):
    """Save today's (or the given day's) score for one category."""
    entry = await engine.entries.upsert(
        subject_id, body.category, body.score, body.entry_date, body.notes,
    )
    return EntryResponse.model_validate(entry)


@router.get(
    "/subjects/{subject_id}/entries", response_model=list[EntryResponse],
)
async def list_entries(
    subject_id: UUID,
    start: date = Query(...),
    end: date = Query(...),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    entries = await engine.entries.query_by_date_range(subject_id, start, end)
    return [EntryResponse.model_validate(e) for e in entries]


@router.get(
    "/subjects/{subject_id}/entries/today", response_model=list[EntryResponse],
)
async def list_today_entries(
    subject_id: UUID, engine: LifeBalanceEngine = Depends(get_engine),
):
    entries = await engine.entries.query_today(subject_id)
    return [EntryResponse.model_validate(e) for e in entries]


@router.get(
    "/subjects/{subject_id}/entries/{category}",
    response_model=list[EntryResponse],
)
async def list_category_entries(
    subject_id: UUID,
    category: LifeCategory,
    limit: int = Query(30, ge=1, le=365),
    engine: LifeBalanceEngine = Depends(get_engine),
):
    entries = await engine.entries.query_by_category(subject_id, category, limit)
    return [EntryResponse.model_validate(e) for e in entries]


@router.get(
    "/subjects/{subject_id}/entries/{category}/latest",
    response_model=EntryResponse | None,
)
async def latest_category_entry(
    subject_id: UUID,
    category: LifeCategory,
    engine: LifeBalanceEngine = Depends(get_engine),
):
    entry = await engine.entries.query_latest(subject_id, category)
    return EntryResponse.model_validate(entry) if entry else None


@router.delete(
    "/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_entry(
    entry_id: UUID, engine: LifeBalanceEngine = Depends(get_engine),
):
    await engine.entries.delete(entry_id)
