"""Unit of work protocol (port).

A unit of work wraps one database transaction and an in-memory queue of
domain events. Events queued during ``with_transaction`` reach the event
bus if and only if that transaction commits, in the order they were queued.

Usage:
    >>> async def work(session: AsyncSession) -> Result[None, DomainError]:
    ...     repo = organisations.with_transaction(session, uow)
    ...     organisation = await repo.find_by_slug(slug)
    ...     ...
    ...     await repo.save(organisation)  # queues events on uow
    ...     return Success(value=None)
    >>>
    >>> result = await uow.with_transaction(work)
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Protocol, TypeVar

from src.domain.events.base_event import DomainEvent

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class UnitOfWorkProtocol(Protocol):
    """Transactional event queue.

    Instances are command-scoped: create one per command, never share one
    between concurrent commands.
    """

    def queue(self, events: Iterable[DomainEvent]) -> None:
        """Append events to the pending queue (FIFO).

        May be called any number of times, by any repository bound to the
        current transaction. Events queued before ``with_transaction`` is
        entered wait for, and are published after, that transaction commits.
        """
        ...

    async def with_transaction(
        self, fn: "Callable[[AsyncSession], Awaitable[T]]"
    ) -> T:
        """Run ``fn`` inside a transaction and publish queued events on commit.

        Raises:
            Exception: Anything raised by ``fn`` or by the commit propagates
                unchanged after rollback; no queued event is published.
        """
        ...
