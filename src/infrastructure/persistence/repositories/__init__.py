"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer.
"""

from src.infrastructure.persistence.repositories.membership_repository import (
    MembershipRepository,
)
from src.infrastructure.persistence.repositories.organisation_repository import (
    OrganisationRepository,
)
from src.infrastructure.persistence.repositories.repository_base import (
    SQLAlchemyRepositoryBase,
    ensure_utc,
)

__all__ = [
    "MembershipRepository",
    "OrganisationRepository",
    "SQLAlchemyRepositoryBase",
    "ensure_utc",
]
