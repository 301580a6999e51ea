"""Application layer DTOs (Data Transfer Objects).

Result types returned by command and query handlers.
"""

from src.application.dtos.organisation_dtos import (
    MembershipResult,
    OrganisationListResult,
    OrganisationResult,
)

__all__ = [
    "MembershipResult",
    "OrganisationListResult",
    "OrganisationResult",
]
