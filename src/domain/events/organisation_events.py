"""Organisation domain events.

Events emitted by the Organisation aggregate. Each one carries the minimal
payload needed by subscribers (logging, notifications) and nothing that
would require a database round-trip to rebuild.

Events:
    - OrganisationCreated: New organisation persisted with its owner
    - OrganisationDeleted: Organisation soft-deleted
    - MemberAdded: User joined an organisation (owner included)
    - MemberRemoved: Membership removed from an organisation
    - MemberRoleChanged: Membership role switched between admin and member
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums.organisation_role import OrganisationRole
from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class OrganisationCreated(DomainEvent):
    """Organisation created together with the owner's admin membership.

    Attributes:
        organisation_id: New organisation.
        name: Display name at creation time.
        slug: URL-safe unique identifier.
        owner_id: User who owns the organisation.
    """

    organisation_id: UUID
    name: str
    slug: str
    owner_id: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class OrganisationDeleted(DomainEvent):
    """Organisation soft-deleted.

    Attributes:
        organisation_id: Deleted organisation.
        slug: Slug at deletion time (no longer resolvable afterwards).
        deleted_at: Soft-delete timestamp written to the row.
    """

    organisation_id: UUID
    slug: str
    deleted_at: datetime


@dataclass(frozen=True, kw_only=True, slots=True)
class MemberAdded(DomainEvent):
    """User added to an organisation."""

    membership_id: UUID
    organisation_id: UUID
    user_id: UUID
    role: OrganisationRole


@dataclass(frozen=True, kw_only=True, slots=True)
class MemberRemoved(DomainEvent):
    """Membership removed from an organisation."""

    membership_id: UUID
    organisation_id: UUID
    user_id: UUID
    deleted_at: datetime


@dataclass(frozen=True, kw_only=True, slots=True)
class MemberRoleChanged(DomainEvent):
    """Membership role changed.

    Only emitted when the role actually changes; assigning the current role
    again is a silent no-op.
    """

    membership_id: UUID
    organisation_id: UUID
    user_id: UUID
    previous_role: OrganisationRole
    new_role: OrganisationRole
