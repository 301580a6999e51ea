"""EventBusProtocol: where committed domain events go.

Publishers:
    - SQLAlchemyUnitOfWork, after its transaction commits, in queue order.
    - Repositories used outside a unit of work, right after their write.

Implementations route by exact event class and are fail-open: a handler
failure is logged and never propagates to ``publish``'s caller.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from src.domain.events.base_event import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBusProtocol(Protocol):
    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None: ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its subscribers; no subscribers is a no-op."""
        ...
