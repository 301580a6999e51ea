"""Domain enums for business logic.

Available Enums:
    - OrganisationRole: Membership roles inside an organisation
"""

from src.domain.enums.organisation_role import (
    OrganisationRole,
    is_valid_organisation_role,
    parse_organisation_role,
)

__all__ = [
    "OrganisationRole",
    "is_valid_organisation_role",
    "parse_organisation_role",
]
