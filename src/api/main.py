"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresDocumentRepository, run_migrations
from src.api.dependencies import get_pool
from src.api.errors import register_exception_handlers
from src.api.middleware import (
    CORSHeadersMiddleware,
    RequestLoggingMiddleware,
    TransportGuardMiddleware,
)
from src.api.models import HealthResponse
from src.api.routes import router
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {"name": "users", "description": "Create and read users"},
    {"name": "todo", "description": "Create, list and delete todos"},
]


def cors_headers(settings: Settings) -> dict[str, str]:
    """CORS headers attached to every response."""
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": settings.cors_allow_methods,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
        "Access-Control-Max-Age": str(settings.cors_max_age),
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Builds the repository handed to every request
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    app.state.pool = pool
    app.state.repository = PostgresDocumentRepository(pool)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Middleware is added innermost first: request logging, then the
    transport guard, then CORS headers around everything.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="users-todo-api",
        description="Users and todo CRUD endpoints over a document store",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
        redirect_slashes=False,
        redoc_url=None,
    )
    app.state.cors_headers = cors_headers(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(TransportGuardMiddleware)
    app.add_middleware(CORSHeadersMiddleware, headers=app.state.cors_headers)

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check(pool: ConnectionPool = Depends(get_pool)) -> HealthResponse:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy.
        Raises exception if database connection fails.
        """
        with pool.connection() as conn:
            conn.execute("SELECT 1")

        return HealthResponse(status="healthy")

    app.include_router(router)

    return app


app = create_app()
