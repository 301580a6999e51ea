"""Aggregate root base with a domain event buffer.

Aggregate methods record events while they mutate state; the persistence
layer drains them after a successful write and hands them to the unit of
work (or the event bus). The buffer itself is never exposed by reference:
``pull_events()`` returns a new list and empties the buffer, so a stale
reference cannot cause a double publish.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.domain.events.base_event import DomainEvent


@dataclass
class AggregateRoot:
    """Base class for aggregates that emit domain events."""

    _events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def pull_events(self) -> list[DomainEvent]:
        """Drain buffered events.

        Returns:
            Events in the order they were recorded. The aggregate's buffer
            is empty afterwards.
        """
        events = list(self._events)
        self._events.clear()
        return events

    def restore_events(self, events: Iterable[DomainEvent]) -> None:
        """Put drained events back in front of any newer ones.

        Used when a repository has no publisher configured, so the events
        are not lost.
        """
        self._events[:0] = list(events)

    @property
    def has_pending_events(self) -> bool:
        return bool(self._events)
