"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.entities.membership import Membership
from src.domain.entities.organisation import Organisation

__all__ = [
    "AggregateRoot",
    "Membership",
    "Organisation",
]
