"""DomainError: the value carried by ``Failure``.

Business rule violations are returned, not raised. The aggregate and the
handlers build a DomainError subclass, wrap it in ``Failure`` and let the
application layer decide which HTTP problem it becomes.
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base of every returned (never raised) error.

    Attributes:
        code: Stable machine-readable code.
        message: Text safe to show to API clients.
        details: Extra key/value context for logs.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
