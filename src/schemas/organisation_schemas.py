"""Organisation and membership request and response schemas.

Pydantic schemas for organisation API endpoints. Includes:
- Request schemas (client → API)
- Response schemas (API → client)
- DTO-to-schema conversion methods
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.dtos.organisation_dtos import (
    MembershipResult,
    OrganisationListResult,
    OrganisationResult,
)
from src.domain.enums.organisation_role import OrganisationRole
from src.domain.protocols.repositories import Page
from src.domain.types import OrganisationName, OrganisationSlug


# =============================================================================
# Request Schemas
# =============================================================================


class OrganisationCreateRequest(BaseModel):
    """Create organisation request. The caller becomes owner and admin."""

    name: OrganisationName
    slug: OrganisationSlug | None = Field(
        None, description="Explicit slug; derived from the name when omitted"
    )


class OrganisationUpdateRequest(BaseModel):
    """Rename organisation request."""

    name: OrganisationName
    slug: OrganisationSlug | None = Field(None, description="New slug, if changing")


class MembershipCreateRequest(BaseModel):
    """Add member request."""

    user_id: UUID = Field(..., description="User to add")
    role: OrganisationRole = Field(
        OrganisationRole.ORG_MEMBER, description="Role of the new member"
    )


class MembershipUpdateRequest(BaseModel):
    """Change member role request."""

    role: OrganisationRole = Field(..., description="New role")


# =============================================================================
# Response Schemas
# =============================================================================


class MembershipResponse(BaseModel):
    """Single membership response."""

    id: UUID = Field(..., description="Membership identifier")
    organisation_id: UUID = Field(..., description="Organisation identifier")
    user_id: UUID = Field(..., description="Member's user identifier")
    role: OrganisationRole = Field(..., description="Member role")
    created_at: datetime = Field(..., description="When the member joined")
    updated_at: datetime = Field(..., description="Last role change")

    @classmethod
    def from_dto(cls, dto: MembershipResult) -> "MembershipResponse":
        return cls(
            id=dto.id,
            organisation_id=dto.organisation_id,
            user_id=dto.user_id,
            role=dto.role,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class MembershipListResponse(BaseModel):
    """One page of memberships.

    Attributes:
        memberships: Memberships on this page.
        total_count: Readable memberships in total.
        limit: Page size.
        offset: Memberships skipped.
    """

    memberships: list[MembershipResponse]
    total_count: int = Field(..., description="Total memberships available")
    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Memberships skipped")

    @classmethod
    def from_page(cls, page: Page[MembershipResult]) -> "MembershipListResponse":
        return cls(
            memberships=[MembershipResponse.from_dto(m) for m in page.items],
            total_count=page.total,
            limit=page.limit,
            offset=page.offset,
        )


class OrganisationResponse(BaseModel):
    """Single organisation response, with its active members."""

    id: UUID = Field(..., description="Organisation identifier")
    name: str = Field(..., description="Display name", examples=["Acme Labs"])
    slug: str = Field(..., description="URL-safe identifier", examples=["acme-labs"])
    owner_id: UUID = Field(..., description="Owner's user identifier")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    memberships: list[MembershipResponse] = Field(
        default_factory=list, description="Active memberships, oldest first"
    )

    @classmethod
    def from_dto(cls, dto: OrganisationResult) -> "OrganisationResponse":
        """Convert application DTO to response schema."""
        return cls(
            id=dto.id,
            name=dto.name,
            slug=dto.slug,
            owner_id=dto.owner_id,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
            memberships=[MembershipResponse.from_dto(m) for m in dto.memberships],
        )


class OrganisationListResponse(BaseModel):
    """One page of organisations."""

    organisations: list[OrganisationResponse]
    total_count: int = Field(..., description="Total organisations available")
    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Organisations skipped")

    @classmethod
    def from_dto(cls, dto: OrganisationListResult) -> "OrganisationListResponse":
        return cls(
            organisations=[OrganisationResponse.from_dto(o) for o in dto.items],
            total_count=dto.total,
            limit=dto.limit,
            offset=dto.offset,
        )
