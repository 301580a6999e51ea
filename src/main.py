"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance, wires the
trace middleware and RFC 9457 exception handlers, and mounts the system
and versioned API routers.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.container import get_database, get_event_bus, get_logger
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Build the event bus (fails fast on unwired events in strict
      mode), create tables for SQLite and development databases
    - Shutdown: Dispose of the connection pool

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    get_event_bus()

    database = get_database()
    if settings.is_sqlite or settings.is_development:
        await database.create_all()

    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await database.close()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Organisations and memberships service",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 9457 error responses)
register_exception_handlers(app)

# System endpoints (root, health, config)
app.include_router(system_router)

# Include API v1 routers (RESTful resource-based endpoints)
app.include_router(v1_router)
