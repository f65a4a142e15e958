"""Route Dependencies — builds the engine for one request-scoped DB session.

Invariants:
    - One repository and one engine per request, sharing the request's AsyncSession
    - Tests override get_engine to bind the engine to a test session and a fixed clock
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifebalance.config import get_settings
from lifebalance.infrastructure.database import get_db
from lifebalance.infrastructure.sql_repository import SqlProgressRepository
from lifebalance.services.engine import LifeBalanceEngine, build_engine


async def get_engine(db: AsyncSession = Depends(get_db)) -> LifeBalanceEngine:
    return build_engine(SqlProgressRepository(db), get_settings())
