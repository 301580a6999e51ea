"""Organisation membership roles.

Every membership carries exactly one role. The role drives the row-level
access policy at the persistence boundary: only ORG_ADMIN members may mutate
an organisation or its memberships, any member may read it.

Usage:
    from src.domain.enums import OrganisationRole, parse_organisation_role

    match parse_organisation_role(raw_role):
        case Success(value=role):
            ...
        case Failure(error=error):
            ...
"""

from enum import Enum

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success


class OrganisationRole(str, Enum):
    """Role a user holds inside an organisation.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are upper-case to match the persisted column values.
    """

    ORG_ADMIN = "ORG_ADMIN"
    """Organisation administrator.

    Capabilities:
        - Add and remove members
        - Change member roles
        - Rename or delete the organisation
    """

    ORG_MEMBER = "ORG_MEMBER"
    """Basic member with read access to the organisation and its members."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: ['ORG_ADMIN', 'ORG_MEMBER'].
        """
        return [role.value for role in cls]


def is_valid_organisation_role(value: str) -> bool:
    """Check if a string is a valid organisation role.

    Args:
        value: String to check (exact, case-sensitive match).

    Returns:
        bool: True if value names an OrganisationRole.
    """
    return value in OrganisationRole.values()


def parse_organisation_role(value: str) -> Result[OrganisationRole, ValidationError]:
    """Parse a string into an OrganisationRole.

    Args:
        value: Raw role string.

    Returns:
        Success(OrganisationRole) if valid.
        Failure(ValidationError) naming the rejected value otherwise.
    """
    if not is_valid_organisation_role(value):
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_ROLE,
                message=f"Invalid organisation role: {value}",
                field="role",
            )
        )
    return Success(value=OrganisationRole(value))
