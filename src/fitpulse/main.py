# src/fitpulse/main.py
"""Main entry point for the FitPulse server."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from fitpulse.api import forum_router, votes_router
from fitpulse.core.settings import settings
from fitpulse.db.session import open_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the database handle for the lifetime of the application."""
    logging.basicConfig(level=settings.log_level.upper())
    with open_database(
        settings.effective_database_url,
        timeout_seconds=settings.vote_store_timeout_seconds,
        echo=settings.sql_debug,
    ) as database:
        if settings.create_tables_on_startup:
            database.create_tables()
        app.state.database = database
        logger.info("fit pulse server is running on port: %s", settings.port)
        try:
            yield
        finally:
            app.state.database = None


# Initialize FastAPI app
app = FastAPI(
    title="FitPulse API",
    description="Fitness platform forum with race-free voting",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

app.include_router(forum_router)
app.include_router(votes_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain liveness banner."""
    return "fit pulse server is running well"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fitpulse.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
