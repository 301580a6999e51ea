"""Row-level authorization for persistence adapters."""

from src.infrastructure.authorization.organisation_policy import (
    AccessPolicy,
    MembershipAccessPolicy,
    OrganisationAccessPolicy,
    PolicyOperation,
    PolicyRejectedError,
    UnrestrictedPolicy,
)

__all__ = [
    "AccessPolicy",
    "MembershipAccessPolicy",
    "OrganisationAccessPolicy",
    "PolicyOperation",
    "PolicyRejectedError",
    "UnrestrictedPolicy",
]
