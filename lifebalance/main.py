"""Life Balance API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LifeBalanceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import lifebalance.infrastructure.database as database
from lifebalance.infrastructure.observability import setup_logging
from lifebalance.config import get_settings
from lifebalance.api.error_handlers import register_error_handlers
from lifebalance.api.routes import (
    health, progress_entries, progress_insights, suggestions,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Life Balance API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Life Balance API shutting down")


app = FastAPI(
    title="Life Balance API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(progress_entries.router)
app.include_router(progress_insights.router)
app.include_router(suggestions.router)

register_error_handlers(app)
