"""Shared kernel: Result, returned errors, settings and the container.

Nothing here imports the domain, application or infrastructure layers at
module level; container factories import them when first called.
"""

from src.core.enums import ErrorCode
from src.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]
