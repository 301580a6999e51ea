"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import DuplicateMembershipError, OwnerRemovalError
"""

from src.domain.errors.organisation_error import (
    DuplicateMembershipError,
    MembershipNotFoundError,
    OrganisationError,
    OrganisationNotFoundError,
    OwnerRemovalError,
    SlugTakenError,
)

__all__ = [
    "DuplicateMembershipError",
    "MembershipNotFoundError",
    "OrganisationError",
    "OrganisationNotFoundError",
    "OwnerRemovalError",
    "SlugTakenError",
]
