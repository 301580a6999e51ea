"""Membership commands (CQRS write operations).

Every membership change goes through the Organisation aggregate, so each
command names the organisation by slug and the handler loads the whole
aggregate before acting.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.organisation_role import OrganisationRole


@dataclass(frozen=True, kw_only=True)
class AddMember:
    """Add a user to an organisation.

    Attributes:
        organisation_slug: Organisation to join.
        user_id: User being added.
        role: Role for the new membership (defaults to ORG_MEMBER).

    Example:
        >>> command = AddMember(organisation_slug="acme", user_id=user_id)
        >>> result = await handler.handle(command)
    """

    organisation_slug: str
    user_id: UUID
    role: OrganisationRole = OrganisationRole.ORG_MEMBER


@dataclass(frozen=True, kw_only=True)
class RemoveMember:
    """Remove a membership. The owner's membership cannot be removed."""

    organisation_slug: str
    membership_id: UUID


@dataclass(frozen=True, kw_only=True)
class UpdateMemberRole:
    """Change the role of an existing membership.

    Assigning the role the member already has succeeds without any write.
    """

    organisation_slug: str
    membership_id: UUID
    role: OrganisationRole
