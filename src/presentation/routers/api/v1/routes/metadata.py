"""Declarative description of one v1 route.

ROUTE_REGISTRY is a list of RouteMetadata; the generator turns each entry
into a FastAPI route with its principal dependency and its documented
Problem Details responses.

Example:
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/organisations/{slug}",
        handler=delete_organisation,
        tags=["Organisations"],
        summary="Delete organisation",
        status_code=204,
        errors=[FORBIDDEN, ORGANISATION_NOT_FOUND],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.PRINCIPAL),
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class AuthLevel(str, Enum):
    """Whether a route needs the gateway principal header.

    Row-level authorization is not decided here; repositories apply the
    principal's access policy to every read and write.
    """

    PUBLIC = "public"
    PRINCIPAL = "principal"


@dataclass(frozen=True, kw_only=True)
class AuthPolicy:
    level: AuthLevel


class IdempotencyLevel(str, Enum):
    """SAFE: no side effects. IDEMPOTENT: repeating gives the same state."""

    SAFE = "safe"
    IDEMPOTENT = "idempotent"
    NON_IDEMPOTENT = "non_idempotent"


@dataclass(frozen=True, kw_only=True)
class ErrorSpec:
    """A documented error response; the body is ProblemDetails by default."""

    status: int
    description: str
    model: type[BaseModel] | None = None


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """One endpoint: identity, docs, response shape and access.

    ``path`` is relative to the v1 prefix. ``operation_id`` defaults to
    the handler's function name. A 204 route has no response model.
    """

    method: HTTPMethod
    path: str
    handler: Callable[..., Awaitable[Any]]
    tags: Sequence[str]

    summary: str
    description: str | None = None
    operation_id: str | None = None

    response_model: type[BaseModel] | None = None
    status_code: int = 200
    errors: list[ErrorSpec] | None = None

    idempotency: IdempotencyLevel
    auth_policy: AuthPolicy

    def __post_init__(self) -> None:
        if self.operation_id is None:
            object.__setattr__(self, "operation_id", self.handler.__name__)
        if self.status_code == 204 and self.response_model is not None:
            raise ValueError(
                f"{self.method.value} {self.path}: 204 responses have no body"
            )
