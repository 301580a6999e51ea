"""Logging event handler for domain events.

Structured logging for every organisation and membership event. One
``handle_{name}`` method per entry in EVENT_REGISTRY; the container
subscribes them automatically at startup.

Log Levels:
    - INFO: All organisation and membership events (normal operations)

Structured Fields:
    - event_id: UUID for event correlation and deduplication
    - occurred_at: ISO 8601 timestamp (UTC)
    - organisation_id / membership_id / user_id: Affected identifiers

Usage:
    >>> event_bus = get_event_bus()
    >>> logging_handler = LoggingEventHandler(logger=get_logger())
    >>> event_bus.subscribe(MemberAdded, logging_handler.handle_member_added)
"""

from src.domain.events.organisation_events import (
    MemberAdded,
    MemberRemoved,
    MemberRoleChanged,
    OrganisationCreated,
    OrganisationDeleted,
)
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Attributes:
        _logger: Logger protocol implementation (from container).

    Example:
        >>> handler = LoggingEventHandler(logger=get_logger())
        >>> event_bus.subscribe(OrganisationCreated, handler.handle_organisation_created)
        >>> await event_bus.publish(OrganisationCreated(...))
        >>> # Log output: {"event": "organisation_created", "organisation_id": "...", ...}
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize logging handler with logger.

        Args:
            logger: Logger protocol implementation from container.
        """
        self._logger = logger

    # =========================================================================
    # Organisation Event Handlers
    # =========================================================================

    async def handle_organisation_created(self, event: OrganisationCreated) -> None:
        """Log organisation creation (INFO level)."""
        self._logger.info(
            "organisation_created",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            organisation_id=str(event.organisation_id),
            slug=event.slug,
            owner_id=str(event.owner_id),
        )

    async def handle_organisation_deleted(self, event: OrganisationDeleted) -> None:
        """Log organisation soft delete (INFO level)."""
        self._logger.info(
            "organisation_deleted",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            organisation_id=str(event.organisation_id),
            slug=event.slug,
            deleted_at=event.deleted_at.isoformat(),
        )

    # =========================================================================
    # Membership Event Handlers
    # =========================================================================

    async def handle_member_added(self, event: MemberAdded) -> None:
        self._logger.info(
            "member_added",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            organisation_id=str(event.organisation_id),
            membership_id=str(event.membership_id),
            user_id=str(event.user_id),
            role=event.role.value,
        )

    async def handle_member_removed(self, event: MemberRemoved) -> None:
        self._logger.info(
            "member_removed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            organisation_id=str(event.organisation_id),
            membership_id=str(event.membership_id),
            user_id=str(event.user_id),
        )

    async def handle_member_role_changed(self, event: MemberRoleChanged) -> None:
        self._logger.info(
            "member_role_changed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            organisation_id=str(event.organisation_id),
            membership_id=str(event.membership_id),
            user_id=str(event.user_id),
            previous_role=event.previous_role.value,
            new_role=event.new_role.value,
        )
