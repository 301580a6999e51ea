"""Problem Details responses for the v1 API.

Every error body the API sends goes through ErrorResponseBuilder, whether it
starts life as an ApplicationError returned by a handler or as an exception
caught by the global handlers.

Exports:
    ErrorResponseBuilder: Render RFC 9457 responses
"""

from collections.abc import Mapping

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.config import settings
from src.core.errors import ValidationError
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# ApplicationErrorCode -> (HTTP status, title). Unlisted codes render as 500.
_APPLICATION_ERRORS: dict[ApplicationErrorCode, tuple[int, str]] = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: (
        status.HTTP_400_BAD_REQUEST,
        "Validation Failed",
    ),
    ApplicationErrorCode.QUERY_VALIDATION_FAILED: (
        status.HTTP_400_BAD_REQUEST,
        "Validation Failed",
    ),
    ApplicationErrorCode.UNAUTHORIZED: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication Required",
    ),
    ApplicationErrorCode.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Access Denied"),
    ApplicationErrorCode.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    ApplicationErrorCode.CONFLICT: (status.HTTP_409_CONFLICT, "Resource Conflict"),
}

_INTERNAL_ERROR = (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


class ErrorResponseBuilder:
    """Render RFC 9457 Problem Details as JSON responses.

    Example:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Organisation 'acme' not found",
        ... )
        >>> ErrorResponseBuilder.from_application_error(error, request, trace_id)
        <JSONResponse 404>
    """

    @staticmethod
    def problem(
        request: Request,
        *,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        trace_id: str | None,
        errors: list[ErrorDetail] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> JSONResponse:
        """Build one Problem Details response.

        Args:
            request: Current request; its path becomes ``instance``.
            status_code: HTTP status of the response.
            error_type: Last segment of the ``type`` URI.
            title: Short summary shared by every problem of this type.
            detail: Explanation specific to this occurrence.
            trace_id: Request trace ID (None outside TraceMiddleware).
            errors: Field-level errors, omitted from the body when empty.
            headers: Extra response headers (e.g. WWW-Authenticate).
        """
        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error_type}",
            title=title,
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            errors=errors or None,
            trace_id=trace_id,
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=dict(headers) if headers else None,
        )

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Render a handler Failure.

        A wrapped ValidationError that names a field is reported in
        ``errors`` as well, so clients can point at the offending input.
        """
        status_code, title = _APPLICATION_ERRORS.get(error.code, _INTERNAL_ERROR)

        field_errors = None
        domain_error = error.domain_error
        if isinstance(domain_error, ValidationError) and domain_error.field:
            field_errors = [
                ErrorDetail(
                    field=domain_error.field,
                    code=domain_error.code.value,
                    message=domain_error.message,
                )
            ]

        return ErrorResponseBuilder.problem(
            request,
            status_code=status_code,
            error_type=error.code.value,
            title=title,
            detail=error.message,
            trace_id=trace_id,
            errors=field_errors,
        )
