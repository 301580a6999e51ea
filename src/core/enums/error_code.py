"""Machine-readable codes carried by DomainError.

Codes are ENTITY_REASON in upper snake case; the value is the lower-case
form that appears in Problem Details ``errors[].code``.
"""

from enum import Enum


class ErrorCode(Enum):
    # Validation
    INVALID_ORGANISATION_NAME = "invalid_organisation_name"
    INVALID_SLUG = "invalid_slug"
    INVALID_ROLE = "invalid_role"
    VALIDATION_FAILED = "validation_failed"

    # Not found
    ORGANISATION_NOT_FOUND = "organisation_not_found"
    MEMBERSHIP_NOT_FOUND = "membership_not_found"

    # Conflict
    MEMBERSHIP_ALREADY_EXISTS = "membership_already_exists"
    SLUG_ALREADY_EXISTS = "slug_already_exists"

    # Business rules
    OWNER_REMOVAL_FORBIDDEN = "owner_removal_forbidden"
