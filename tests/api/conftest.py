"""API test fixtures.

The app runs its real lifespan against the SQLite file configured in the
root conftest. Every test uses fresh principals and unique names, so tests
never see each other's organisations.
"""

from collections.abc import Iterator
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from src.core.config import settings
from src.main import app


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def as_user():
    """Build the principal header for a user.

    Usage:
        client.get(url, headers=as_user(owner_id))
    """

    def _headers(user_id: UUID) -> dict[str, str]:
        return {settings.principal_header: str(user_id)}

    return _headers


@pytest.fixture
def create_org(client, as_user):
    """POST an organisation and return its JSON body."""

    def _create(owner_id: UUID | None = None, name: str | None = None) -> dict:
        owner_id = owner_id or uuid4()
        response = client.post(
            "/api/v1/organisations",
            json={"name": name or f"Org {uuid4().hex[:10]}"},
            headers=as_user(owner_id),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
