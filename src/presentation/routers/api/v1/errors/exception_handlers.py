"""Global exception handlers.

Exceptions that escape a route (or a dependency such as the principal
lookup) are rendered as Problem Details through ErrorResponseBuilder:

    HTTPException          -> its own status code
    RequestValidationError -> 422 with one entry per invalid field
    PolicyRejectedError    -> 403
    IntegrityError         -> 409 (unique constraint lost a race)
    anything else          -> 500, logged with the trace ID

Exports:
    register_exception_handlers: Install the handlers on a FastAPI app
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from src.core.container import get_logger
from src.infrastructure.authorization import PolicyRejectedError
from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from src.presentation.routers.api.v1.errors.problem_details import ErrorDetail

# status -> (title, type slug) for problems raised as HTTPException
_HTTP_PROBLEMS: dict[int, tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("Bad Request", "bad-request"),
    status.HTTP_401_UNAUTHORIZED: ("Authentication Required", "unauthorized"),
    status.HTTP_403_FORBIDDEN: ("Access Denied", "forbidden"),
    status.HTTP_404_NOT_FOUND: ("Resource Not Found", "not-found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("Method Not Allowed", "method-not-allowed"),
    status.HTTP_409_CONFLICT: ("Resource Conflict", "conflict"),
    status.HTTP_503_SERVICE_UNAVAILABLE: ("Service Unavailable", "service-unavailable"),
}


def _trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render HTTPException (e.g. the 401 from a missing principal header).

    Headers on the exception are passed through to the response.
    """
    assert isinstance(exc, HTTPException)

    title, error_type = _HTTP_PROBLEMS.get(exc.status_code, ("Error", "error"))
    return ErrorResponseBuilder.problem(
        request,
        status_code=exc.status_code,
        error_type=error_type,
        title=title,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        trace_id=_trace_id(request),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Render request validation failures as 422 with field errors.

    Example:
        POST /api/v1/organisations {"name": "A"} yields
        errors=[{"field": "name", "code": "string_too_short", ...}]
    """
    assert isinstance(exc, RequestValidationError)

    field_errors = []
    for error in exc.errors():
        # ("body", "name") -> "name"; ("query", "limit") -> "query.limit"
        parts = [str(part) for part in error.get("loc", ()) if part != "body"]
        field_errors.append(
            ErrorDetail(
                field=".".join(parts) or "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    return ErrorResponseBuilder.problem(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_type="validation-failed",
        title="Validation Failed",
        detail="Request validation failed. Check 'errors' for details.",
        trace_id=_trace_id(request),
        errors=field_errors,
    )


async def policy_rejected_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a row-level policy denial as 403.

    The repository raised because the row exists but the principal may not
    read or change it. The unit of work has rolled back already.
    """
    assert isinstance(exc, PolicyRejectedError)

    get_logger().info(
        "request_policy_rejected",
        operation=exc.operation.value,
        resource_type=exc.resource_type,
        resource_id=str(exc.resource_id),
        request_path=request.url.path,
    )
    return ErrorResponseBuilder.problem(
        request,
        status_code=status.HTTP_403_FORBIDDEN,
        error_type="forbidden",
        title="Access Denied",
        detail=f"Not allowed to {exc.operation.value} this {exc.resource_type}",
        trace_id=_trace_id(request),
    )


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a unique constraint violation as 409.

    Concurrent requests can both pass the aggregate's duplicate check; the
    UNIQUE index on (organisation_id, user_id) or on slug stops the second.
    """
    assert isinstance(exc, IntegrityError)

    get_logger().warning(
        "request_integrity_conflict",
        error_message=str(exc.orig),
        request_path=request.url.path,
    )
    return ErrorResponseBuilder.problem(
        request,
        status_code=status.HTTP_409_CONFLICT,
        error_type="conflict",
        title="Resource Conflict",
        detail="The request conflicts with the current state of the resource.",
        trace_id=_trace_id(request),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the exception and answer 500 without internals."""
    get_logger().error(
        "request_unhandled_exception",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )
    return ErrorResponseBuilder.problem(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type="internal-server-error",
        title="Internal Server Error",
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        trace_id=_trace_id(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler above on ``app``.

    Order does not matter to Starlette; the most specific class wins and
    ``Exception`` catches the rest.
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PolicyRejectedError, policy_rejected_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
