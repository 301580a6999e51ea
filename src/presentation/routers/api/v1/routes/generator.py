"""Turn ROUTE_REGISTRY entries into FastAPI routes.

Example:
    v1_router = APIRouter(prefix=settings.api_v1_prefix)
    register_routes_from_registry(v1_router, ROUTE_REGISTRY)
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.core.container import get_principal_id
from src.presentation.routers.api.v1.errors import ProblemDetails
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    RouteMetadata,
)

_MISSING_PRINCIPAL = ErrorSpec(status=401, description="Missing or invalid principal")


def register_routes_from_registry(
    router: APIRouter,
    registry: list[RouteMetadata],
) -> None:
    """Add one route per entry to ``router`` via ``add_api_route``."""
    for metadata in registry:
        errors = list(metadata.errors or [])
        if metadata.auth_policy.level == AuthLevel.PRINCIPAL and not any(
            error.status == 401 for error in errors
        ):
            errors.insert(0, _MISSING_PRINCIPAL)

        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=[metadata.method.value],
            response_model=metadata.response_model,
            status_code=metadata.status_code,
            tags=list(metadata.tags),
            summary=metadata.summary,
            description=metadata.description,
            operation_id=metadata.operation_id,
            responses=_build_responses(errors) if errors else None,
            dependencies=_build_dependencies(metadata.auth_policy),
        )


def _build_dependencies(auth_policy: AuthPolicy) -> list[Any]:
    """Route-level dependencies for an auth policy.

    Raises:
        ValueError: Unknown auth level (fail closed).
    """
    match auth_policy.level:
        case AuthLevel.PUBLIC:
            return []
        case AuthLevel.PRINCIPAL:
            return [Depends(get_principal_id)]
        case _:
            msg = f"Unknown auth level: {auth_policy.level}"
            raise ValueError(msg)


def _build_responses(errors: list[ErrorSpec]) -> dict[int | str, dict[str, Any]]:
    return {
        error.status: {
            "description": error.description,
            "model": error.model or ProblemDetails,
        }
        for error in errors
    }
