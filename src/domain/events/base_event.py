"""Base domain event class.

Domain events record "things that happened" to an organisation and are
always named in past tense (OrganisationCreated, MemberRemoved). They are
produced synchronously by aggregate methods, buffered on the aggregate, and
delivered to subscribers by the event bus only after the transaction that
persisted them commits.

Architecture:
    - Frozen dataclass (immutable after creation)
    - Auto-generated event_id (UUID) for tracking and deduplication
    - occurred_at timestamp (UTC) for ordering
    - All events inherit from this base class

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class MemberAdded(DomainEvent):
    ...     membership_id: UUID
    ...     organisation_id: UUID
    >>>
    >>> event = MemberAdded(membership_id=uuid7(), organisation_id=uuid7())
    >>> event.event_id  # Auto-generated UUID
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming (MemberAdded, NOT AddMember)
        3. Be frozen dataclasses with kw_only=True
        4. Carry only the payload subscribers need

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: Timestamp when the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
