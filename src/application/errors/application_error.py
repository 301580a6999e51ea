"""ApplicationError: what a handler's ``Failure`` carries to the routes.

The code picks the HTTP status (see ErrorResponseBuilder); the wrapped
domain error, when there is one, supplies field-level detail.
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors.common_errors import ConflictError, NotFoundError
from src.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    COMMAND_EXECUTION_FAILED = "command_execution_failed"
    QUERY_VALIDATION_FAILED = "query_validation_failed"
    QUERY_FAILED = "query_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Handler-level failure.

    Attributes:
        code: Decides the HTTP status and problem type.
        message: Becomes the problem ``detail``.
        domain_error: The domain error this wraps, if any.
        details: Extra context for logs.
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None


def from_domain_error(error: DomainError) -> ApplicationError:
    """Wrap a domain error, picking the application code from its type.

    Not-found and conflict errors keep their meaning; anything else the
    domain refuses (validation, owner removal) is a rejected command.
    """
    if isinstance(error, NotFoundError):
        code = ApplicationErrorCode.NOT_FOUND
    elif isinstance(error, ConflictError):
        code = ApplicationErrorCode.CONFLICT
    else:
        code = ApplicationErrorCode.COMMAND_VALIDATION_FAILED
    return ApplicationError(code=code, message=error.message, domain_error=error)
