"""Event bus adapter and its handlers.

The container builds one InMemoryEventBus per process and subscribes
LoggingEventHandler methods to every event in EVENT_REGISTRY.
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
