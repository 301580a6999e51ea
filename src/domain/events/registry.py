"""Domain Events Registry - Single Source of Truth.

Catalogs every domain event with the metadata the container needs to wire
subscribers automatically. Each registered event must have a matching
``handle_{name}`` method on every handler type it requires; the registry
compliance tests fail when an entry and a handler drift apart.

Adding new events:
1. Define event dataclass in organisation_events.py
2. Add entry to EVENT_REGISTRY below
3. Add ``handle_{name}`` to LoggingEventHandler
"""

from dataclasses import dataclass
from enum import Enum
from typing import Type

from src.domain.events.base_event import DomainEvent
from src.domain.events.organisation_events import (
    MemberAdded,
    MemberRemoved,
    MemberRoleChanged,
    OrganisationCreated,
    OrganisationDeleted,
)


class EventCategory(Enum):
    """Event categories for organization and filtering."""

    ORGANISATION = "organisation"
    MEMBERSHIP = "membership"


@dataclass(frozen=True)
class EventMetadata:
    """Metadata for a domain event.

    Attributes:
        event_class: The event dataclass.
        category: Event category.
        name: Snake-case event name, used to derive handler method names.
        requires_logging: LoggingEventHandler handles this event.
    """

    event_class: Type[DomainEvent]
    category: EventCategory
    name: str
    requires_logging: bool = True

    @property
    def handler_method(self) -> str:
        """Handler method name expected on subscribed handler classes."""
        return f"handle_{self.name}"


# ═══════════════════════════════════════════════════════════════
# EVENT REGISTRY - Single Source of Truth
# ═══════════════════════════════════════════════════════════════

EVENT_REGISTRY: list[EventMetadata] = [
    EventMetadata(
        event_class=OrganisationCreated,
        category=EventCategory.ORGANISATION,
        name="organisation_created",
    ),
    EventMetadata(
        event_class=OrganisationDeleted,
        category=EventCategory.ORGANISATION,
        name="organisation_deleted",
    ),
    EventMetadata(
        event_class=MemberAdded,
        category=EventCategory.MEMBERSHIP,
        name="member_added",
    ),
    EventMetadata(
        event_class=MemberRemoved,
        category=EventCategory.MEMBERSHIP,
        name="member_removed",
    ),
    EventMetadata(
        event_class=MemberRoleChanged,
        category=EventCategory.MEMBERSHIP,
        name="member_role_changed",
    ),
]


def get_all_events() -> list[Type[DomainEvent]]:
    """Get all registered event classes.

    Returns:
        List of event classes in registry.
    """
    return [meta.event_class for meta in EVENT_REGISTRY]


def get_events_requiring_handler(handler_type: str) -> list[EventMetadata]:
    """Get registry entries requiring a specific handler.

    Args:
        handler_type: Currently only "logging".

    Returns:
        List of metadata entries requiring that handler.

    Raises:
        ValueError: If handler_type is invalid.
    """
    field_map = {
        "logging": "requires_logging",
    }

    if handler_type not in field_map:
        raise ValueError(
            f"Invalid handler_type: {handler_type}. "
            f"Must be one of: {list(field_map.keys())}"
        )

    field = field_map[handler_type]
    return [meta for meta in EVENT_REGISTRY if getattr(meta, field)]
