"""Domain events module.

Exports the organisation domain events and their base class.

Usage:
    >>> from src.domain.events import MemberAdded
    >>> event = MemberAdded(
    ...     membership_id=membership.id,
    ...     organisation_id=organisation.id,
    ...     user_id=user_id,
    ...     role=OrganisationRole.ORG_MEMBER,
    ... )
"""

from src.domain.events.base_event import DomainEvent
from src.domain.events.organisation_events import (
    MemberAdded,
    MemberRemoved,
    MemberRoleChanged,
    OrganisationCreated,
    OrganisationDeleted,
)

__all__ = [
    "DomainEvent",
    "MemberAdded",
    "MemberRemoved",
    "MemberRoleChanged",
    "OrganisationCreated",
    "OrganisationDeleted",
]
