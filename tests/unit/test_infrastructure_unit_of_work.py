"""Unit tests for SQLAlchemyUnitOfWork.

The database is mocked: ``transaction()`` yields an AsyncMock session so the
tests can assert on commit/rollback calls and on publish ordering.
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.events import OrganisationCreated, OrganisationDeleted
from src.infrastructure.persistence.unit_of_work import SQLAlchemyUnitOfWork


def _event(slug: str = "acme") -> OrganisationCreated:
    return OrganisationCreated(
        organisation_id=uuid4(), name="Acme", slug=slug, owner_id=uuid4()
    )


@pytest.fixture
def session():
    return AsyncMock()


@pytest.fixture
def database(session):
    db = MagicMock()

    @asynccontextmanager
    async def transaction():
        yield session

    db.transaction = transaction
    return db


@pytest.fixture
def event_bus():
    bus = MagicMock()
    bus.published = []

    async def publish(event):
        bus.published.append(event)

    bus.publish = AsyncMock(side_effect=publish)
    return bus


@pytest.fixture
def uow(database, event_bus, mock_logger):
    return SQLAlchemyUnitOfWork(
        database=database, event_bus=event_bus, logger=mock_logger
    )


@pytest.mark.unit
class TestCommitAndPublish:
    async def test_commits_then_publishes_in_queue_order(self, uow, session, event_bus):
        first, second, third = _event("a"), _event("b"), _event("c")

        async def work(s):
            assert s is session
            uow.queue([first, second])
            uow.queue([third])
            assert event_bus.publish.await_count == 0
            return Success(value="done")

        result = await uow.with_transaction(work)

        assert result == Success(value="done")
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()
        assert event_bus.published == [first, second, third]
        assert uow.pending_events == ()

    async def test_plain_return_values_commit(self, uow, session):
        result = await uow.with_transaction(AsyncMock(return_value=42))

        assert result == 42
        session.commit.assert_awaited_once()

    async def test_events_queued_before_transaction_publish_on_commit(
        self, uow, event_bus
    ):
        early = _event()
        uow.queue([early])

        await uow.with_transaction(AsyncMock(return_value=None))

        assert event_bus.published == [early]

    async def test_publish_happens_after_commit(self, uow, session, event_bus):
        order: list[str] = []
        session.commit.side_effect = lambda: order.append("commit")
        event_bus.publish.side_effect = lambda e: order.append("publish")

        async def work(_):
            uow.queue([_event()])
            return Success(value=None)

        await uow.with_transaction(work)

        assert order == ["commit", "publish"]


@pytest.mark.unit
class TestRollback:
    async def test_exception_rolls_back_and_reraises(
        self, uow, session, event_bus, mock_logger
    ):
        async def work(_):
            uow.queue([_event()])
            raise RuntimeError("db gone")

        with pytest.raises(RuntimeError, match="db gone"):
            await uow.with_transaction(work)

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
        event_bus.publish.assert_not_awaited()
        assert uow.pending_events == ()
        args, kwargs = mock_logger.warning.call_args
        assert args == ("unit_of_work_rolled_back",)
        assert kwargs["reason"] == "exception"
        assert kwargs["discarded_events"] == 1

    async def test_failure_result_rolls_back_and_is_returned(
        self, uow, session, event_bus, mock_logger
    ):
        failure = Failure(
            error=ValidationError(code=ErrorCode.INVALID_SLUG, message="bad slug")
        )

        async def work(_):
            uow.queue([_event(), _event()])
            return failure

        result = await uow.with_transaction(work)

        assert result is failure
        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
        event_bus.publish.assert_not_awaited()
        _, kwargs = mock_logger.info.call_args
        assert kwargs["reason"] == "failure_result"
        assert kwargs["discarded_events"] == 2

    async def test_commit_failure_discards_events_and_reraises(
        self, uow, session, event_bus, mock_logger
    ):
        session.commit.side_effect = RuntimeError("serialization failure")

        async def work(_):
            uow.queue([_event()])
            return Success(value=None)

        with pytest.raises(RuntimeError, match="serialization failure"):
            await uow.with_transaction(work)

        event_bus.publish.assert_not_awaited()
        assert uow.pending_events == ()
        args, kwargs = mock_logger.error.call_args
        assert args == ("unit_of_work_commit_failed",)
        assert kwargs["discarded_events"] == 1

    async def test_queue_is_reusable_after_rollback(self, uow, event_bus):
        async def failing(_):
            uow.queue([_event("dropped")])
            raise ValueError("nope")

        with pytest.raises(ValueError):
            await uow.with_transaction(failing)

        kept = OrganisationDeleted(
            organisation_id=uuid4(), slug="kept", deleted_at=_event().occurred_at
        )

        async def succeeding(_):
            uow.queue([kept])
            return Success(value=None)

        await uow.with_transaction(succeeding)

        assert event_bus.published == [kept]
