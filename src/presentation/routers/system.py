"""Unversioned system endpoints: ``/``, ``/health`` and ``/config``.

None of them needs the principal header, and none touches organisation
data.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_database

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> JSONResponse:
    """200 while the database answers ``SELECT 1``, 503 otherwise."""
    if await get_database().check_connection():
        return JSONResponse(content={"status": "healthy", "database": "ok"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy", "database": "unreachable"},
    )


@system_router.get("/config")
async def get_config() -> JSONResponse:
    """Effective settings, development only; the database URL is withheld."""
    if not settings.is_development:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Config endpoint only available in development"},
        )
    return JSONResponse(
        content=settings.model_dump(mode="json", exclude={"database_url"})
    )
