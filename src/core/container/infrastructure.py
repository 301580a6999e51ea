"""Database and logger factories.

``get_database`` and ``get_logger`` are process-wide (lru_cache);
``get_db_session`` yields one session per request for read paths.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.enums import Environment
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol


@lru_cache()
def get_database() -> Database:
    return Database(database_url=settings.database_url, echo=settings.db_echo)


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Console logger: coloured in development, JSON everywhere else."""
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        service=settings.app_name,
        use_json=settings.environment != Environment.DEVELOPMENT,
        level=settings.log_level,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; commits on success, rolls back on error.

    Commands do not write through it: each unit of work opens its own
    transaction via ``Database.transaction()``.
    """
    async with get_database().get_session() as session:
        yield session
