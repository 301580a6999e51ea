"""Process-local EventBusProtocol adapter.

Handlers are looked up by the exact event class. All handlers of one
event run concurrently; separate ``publish`` calls complete in the order
they are awaited, which keeps the unit of work's queue FIFO.

A failing handler is logged at WARNING and never reaches the publisher:
the transaction that produced the event has already committed.
"""

import asyncio
from collections import defaultdict

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


def _handler_name(handler: EventHandler) -> str:
    return (
        getattr(handler, "__qualname__", None)
        or getattr(handler, "__name__", None)
        or repr(handler)
    )


class InMemoryEventBus:
    """Fail-open, single-process event bus (not thread-safe).

    Example:
        >>> bus = InMemoryEventBus(logger=logger)
        >>> bus.subscribe(MemberAdded, logging_handler.handle_member_added)
        >>> await bus.publish(MemberAdded(...))
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Call ``handler`` for every published ``event_type`` (subclasses excluded).

        Subscribing the same handler twice delivers each event twice.
        """
        self._handlers[event_type].append(handler)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        handlers = list(self._handlers.get(type(event), ()))
        if not handlers:
            return

        event_name = type(event).__name__
        self._logger.debug(
            "event_publishing",
            event_type=event_name,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        outcomes = await asyncio.gather(
            *(handler(event) for handler in handlers),
            return_exceptions=True,
        )
        for handler, outcome in zip(handlers, outcomes, strict=True):
            if isinstance(outcome, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_name,
                    event_id=str(event.event_id),
                    handler_name=_handler_name(handler),
                    error_type=type(outcome).__name__,
                    error_message=str(outcome),
                )
