"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import (
    InMemoryOrganisationStore,
    InMemoryTeamStore,
    InMemoryUserStore,
)
from src.adapters.repository.postgres import (
    PostgresOrganisationStore,
    PostgresTeamStore,
    PostgresUserStore,
    run_migrations,
)
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Onboarding API v1 - Register users with their organisation",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool and runs migrations (postgres backend)
    - Creates the user, organisation and team stores
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")

    pool = None
    if settings.storage_backend == "memory":
        logger.warning("Using in-memory stores; data is lost on shutdown")
        app.state.stores = (
            InMemoryUserStore(),
            InMemoryOrganisationStore(),
            InMemoryTeamStore(),
        )
    else:
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app.state.stores = (
            PostgresUserStore(pool),
            PostgresOrganisationStore(pool),
            PostgresTeamStore(pool),
        )

    app.state.pool = pool
    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="onboard",
    description="Organisation onboarding API - Registers a user with a new organisation and its owners team",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
