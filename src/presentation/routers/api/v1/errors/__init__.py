"""Error rendering for the v1 API.

Handlers return ApplicationError values and routes hand them to
ErrorResponseBuilder; exceptions are caught by the handlers installed with
register_exception_handlers. Both paths produce a ProblemDetails body.
"""

from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from src.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
