"""Pytest configuration.

The application settings are read once, at import time, so the test
environment is set up here before any ``src`` module is imported:

1. ENVIRONMENT=testing (JSON logs, no dev-only endpoints)
2. DATABASE_URL points at a throwaway SQLite file for the API tests

Shared fixtures:
    mock_logger: MagicMock standing in for LoggerProtocol
    database: Fresh file-backed SQLite database with all tables created
    make_organisation: Helper building an Organisation aggregate
"""

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
import pytest_asyncio

_API_DB_DIR = Path(tempfile.mkdtemp(prefix="organisations-api-"))
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_API_DB_DIR / 'api.db'}"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from src.domain.entities.organisation import Organisation  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double; every LoggerProtocol method is a MagicMock."""
    return MagicMock()


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """File-backed SQLite database, one per test.

    A file (not :memory:) so that every pooled connection sees the same
    data, as the unit of work opens its own session.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def make_organisation():
    """Build an Organisation with a unique slug.

    Usage:
        organisation = make_organisation(owner_id=owner)
    """

    def _make(
        *,
        owner_id: UUID | None = None,
        name: str = "Acme Labs",
        slug: str | None = None,
    ) -> Organisation:
        return Organisation.create(
            name=name,
            slug=slug or f"acme-{uuid4().hex[:8]}",
            owner_id=owner_id or uuid4(),
        )

    return _make
