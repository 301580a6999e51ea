# mypy: disable-error-code="arg-type"
"""Event bus dependency factory.

Application-scoped singleton for domain event publishing.
Subscribes event handlers at startup using registry-driven auto-wiring.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Event handlers are registered from EVENT_REGISTRY: for each entry
    with ``requires_logging`` the factory looks up
    ``LoggingEventHandler.handle_{name}`` and subscribes it.

    Strict mode (``EVENTS_STRICT_MODE=true``, the default) fails at startup
    when a handler method is missing. Graceful mode logs a warning and
    skips the subscription.

    Returns:
        Event bus implementing EventBusProtocol.

    Raises:
        RuntimeError: Strict mode and a registered event has no handler.

    Usage:
        # Presentation Layer (FastAPI Depends)
        event_bus: EventBusProtocol = Depends(get_event_bus)
    """
    from src.core.config import get_settings
    from src.core.container.infrastructure import get_logger
    from src.domain.events.registry import EVENT_REGISTRY
    from src.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    strict_mode = get_settings().events_strict_mode
    logger = get_logger()

    event_bus = InMemoryEventBus(logger=logger)
    logging_handler = LoggingEventHandler(logger=logger)

    for metadata in EVENT_REGISTRY:
        if not metadata.requires_logging:
            continue

        handler_method = getattr(logging_handler, metadata.handler_method, None)
        if handler_method is None:
            if strict_mode:
                raise RuntimeError(
                    f"EVENTS_STRICT_MODE: Missing required logging handler\n"
                    f"Event: {metadata.event_class.__name__}\n"
                    f"Expected method: LoggingEventHandler.{metadata.handler_method}\n\n"
                    f"Fix: Implement handler in src/infrastructure/events/handlers/logging_event_handler.py\n"
                    f"Or disable strict mode: Set EVENTS_STRICT_MODE=false in .env"
                )
            logger.warning(
                "Missing logging handler (graceful mode)",
                event_class=metadata.event_class.__name__,
                handler_method=metadata.handler_method,
            )
            continue

        event_bus.subscribe(metadata.event_class, handler_method)

    return event_bus
