"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import OrganisationCreateRequest, OrganisationResponse
"""

from src.schemas.organisation_schemas import (
    MembershipCreateRequest,
    MembershipListResponse,
    MembershipResponse,
    MembershipUpdateRequest,
    OrganisationCreateRequest,
    OrganisationListResponse,
    OrganisationResponse,
    OrganisationUpdateRequest,
)

__all__ = [
    # Organisations
    "OrganisationCreateRequest",
    "OrganisationListResponse",
    "OrganisationResponse",
    "OrganisationUpdateRequest",
    # Memberships
    "MembershipCreateRequest",
    "MembershipListResponse",
    "MembershipResponse",
    "MembershipUpdateRequest",
]
