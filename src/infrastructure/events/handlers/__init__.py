"""Event handlers for infrastructure integration.

Handlers react to domain events and perform infrastructure side effects.
All handlers follow fail-open design: one handler failure doesn't break
others.

Handlers:
    - LoggingEventHandler: Structured logging of organisation and membership events
"""

from src.infrastructure.events.handlers.logging_event_handler import LoggingEventHandler

__all__ = [
    "LoggingEventHandler",
]
