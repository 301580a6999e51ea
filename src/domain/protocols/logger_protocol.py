"""LoggerProtocol definition for structured logging.

This protocol standardizes structured logging across the codebase while
remaining backend-agnostic. Implementations MUST ensure logs are structured
(key-value context).

Log Levels (standard 5-level hierarchy):
    - DEBUG: Detailed diagnostic info (event publishing, SQL-level detail)
    - INFO: Normal operational events (organisation created, commit)
    - WARNING: Degraded behaviour (event handler failed, rollback)
    - ERROR: Operation failed, system continues
    - CRITICAL: System-wide failure, immediate attention

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("organisation_created", organisation_id=str(org.id))

    scoped = logger.bind(principal_id=str(principal_id))
    scoped.warning("unit_of_work_rolled_back")  # principal_id auto-included
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self,
        message: str,
        /,
        *,
        error: Exception | None = None,
        **context: Any,
    ) -> None:
        """Log an error.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementations include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self,
        message: str,
        /,
        *,
        error: Exception | None = None,
        **context: Any,
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
