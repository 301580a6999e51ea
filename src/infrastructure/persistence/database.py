"""Async engine and session factory.

Two ways to get a session:

- ``get_session()``: request-scoped; commits on clean exit and rolls back
  on error. Queries and unrestricted lookups read through it.
- ``transaction()``: the caller owns commit and rollback. SQLAlchemyUnitOfWork
  uses it so a failed commit can be told apart from a failed callback.

PostgreSQL runs on asyncpg. SQLite runs on aiosqlite, with foreign keys
switched on per connection so ON DELETE CASCADE behaves the same.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine; hands out sessions.

    Args:
        database_url: SQLAlchemy async URL.
        echo: Log every SQL statement.
        pool_size: PostgreSQL pool size.
        max_overflow: PostgreSQL connections allowed above ``pool_size``.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
    ) -> None:
        engine_kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        if database_url.startswith("postgresql"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                connect_args={"server_settings": {"jit": "off"}, "timeout": 30},
            )

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        if database_url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # Rows stay readable after commit; repositories map them after flush
        self.async_session = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session with a transaction already begun; uncommitted work is
        rolled back when the session closes."""
        async with self.async_session() as session:
            await session.begin()
            yield session

    async def create_all(self) -> None:
        """Create missing tables (SQLite and development; Alembic elsewhere)."""
        from src.infrastructure.persistence import models  # noqa: F401
        from src.infrastructure.persistence.base import BaseModel

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()

    async def check_connection(self) -> bool:
        """True when ``SELECT 1`` succeeds; any driver error counts as down."""
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
        except Exception:
            return False
        return True
