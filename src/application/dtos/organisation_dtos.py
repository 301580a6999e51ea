"""Organisation DTOs (Data Transfer Objects).

Result dataclasses returned by organisation and membership handlers, so the
presentation layer never touches domain entities.

DTOs:
    - MembershipResult: One membership
    - OrganisationResult: Organisation with its active memberships
    - OrganisationListResult: One page of organisations
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.entities.membership import Membership
from src.domain.entities.organisation import Organisation
from src.domain.enums.organisation_role import OrganisationRole


@dataclass
class MembershipResult:
    """Membership result DTO.

    Attributes:
        id: Membership identifier.
        organisation_id: Owning organisation.
        user_id: Member.
        role: ORG_ADMIN or ORG_MEMBER.
        created_at: When the member joined.
        updated_at: Last role change.
    """

    id: UUID
    organisation_id: UUID
    user_id: UUID
    role: OrganisationRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, membership: Membership) -> "MembershipResult":
        return cls(
            id=membership.id,
            organisation_id=membership.organisation_id,
            user_id=membership.user_id,
            role=membership.role,
            created_at=membership.created_at,
            updated_at=membership.updated_at,
        )


@dataclass
class OrganisationResult:
    """Organisation result DTO.

    Attributes:
        id: Organisation identifier.
        name: Display name.
        slug: URL-safe identifier.
        owner_id: Owner's user id.
        created_at: Creation timestamp.
        updated_at: Last mutation timestamp.
        memberships: Active memberships, oldest first.
    """

    id: UUID
    name: str
    slug: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    memberships: list[MembershipResult] = field(default_factory=list)

    @classmethod
    def from_entity(cls, organisation: Organisation) -> "OrganisationResult":
        return cls(
            id=organisation.id,
            name=organisation.name,
            slug=organisation.slug,
            owner_id=organisation.owner_id,
            created_at=organisation.created_at,
            updated_at=organisation.updated_at,
            memberships=[
                MembershipResult.from_entity(m) for m in organisation.memberships
            ],
        )


@dataclass
class OrganisationListResult:
    """One page of organisations.

    Attributes:
        items: Organisations on this page.
        total: Readable organisations in total.
        limit: Page size.
        offset: Organisations skipped.
    """

    items: list[OrganisationResult]
    total: int
    limit: int
    offset: int
