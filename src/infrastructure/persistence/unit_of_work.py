"""SQLAlchemy unit of work with a commit-gated event queue.

Implements UnitOfWorkProtocol. One instance per command:

    >>> uow = SQLAlchemyUnitOfWork(database=db, event_bus=bus, logger=logger)
    >>> result = await uow.with_transaction(work)

Flow of ``with_transaction(fn)``:
    1. Open a session and begin a transaction.
    2. ``await fn(session)``. Repositories bound with
       ``repo.with_transaction(session, uow)`` queue events here.
    3. fn raised: roll back, drop queued events, re-raise.
       fn returned Failure: roll back, drop queued events, return it.
    4. Commit. A failing commit drops queued events and re-raises.
    5. Publish queued events one by one, in queue order.

Events reach the bus only after a commit. They are held in memory until
then; a crash between commit and publish loses them (no outbox table).
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.result import Failure
from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.persistence.database import Database

T = TypeVar("T")


class SQLAlchemyUnitOfWork:
    """Transaction plus FIFO event queue.

    Not safe to share between concurrent commands; the queue belongs to
    whichever transaction is currently open.
    """

    def __init__(
        self,
        *,
        database: Database,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._database = database
        self._event_bus = event_bus
        self._logger = logger
        self._pending: list[DomainEvent] = []

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._pending)

    def queue(self, events: Iterable[DomainEvent]) -> None:
        self._pending.extend(events)

    async def with_transaction(
        self, fn: Callable[[AsyncSession], Awaitable[T]]
    ) -> T:
        async with self._database.transaction() as session:
            try:
                result = await fn(session)
            except Exception as e:
                await session.rollback()
                discarded = self._discard()
                self._logger.warning(
                    "unit_of_work_rolled_back",
                    reason="exception",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    discarded_events=discarded,
                )
                raise

            if isinstance(result, Failure):
                await session.rollback()
                discarded = self._discard()
                self._logger.info(
                    "unit_of_work_rolled_back",
                    reason="failure_result",
                    error_code=str(getattr(result.error, "code", "")),
                    discarded_events=discarded,
                )
                return result

            try:
                await session.commit()
            except Exception as e:
                discarded = self._discard()
                self._logger.error(
                    "unit_of_work_commit_failed",
                    error=e,
                    discarded_events=discarded,
                )
                raise

        events = list(self._pending)
        self._pending.clear()
        self._logger.debug("unit_of_work_committed", event_count=len(events))

        for event in events:
            await self._event_bus.publish(event)

        return result

    def _discard(self) -> int:
        count = len(self._pending)
        self._pending.clear()
        return count
