"""Route registry: ROUTE_REGISTRY lists every v1 endpoint.

metadata.py holds the entry types, registry.py the entries and
generator.py the code that mounts them on an APIRouter.
"""

from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)

__all__ = [
    "AuthLevel",
    "AuthPolicy",
    "ErrorSpec",
    "HTTPMethod",
    "IdempotencyLevel",
    "RouteMetadata",
]
