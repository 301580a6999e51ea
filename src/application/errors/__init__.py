"""Errors returned by command and query handlers.

Handlers wrap domain errors with ``from_domain_error``; the presentation
layer maps the resulting ApplicationErrorCode onto an HTTP status.
"""

from src.application.errors.application_error import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)

__all__ = [
    "ApplicationError",
    "ApplicationErrorCode",
    "from_domain_error",
]
