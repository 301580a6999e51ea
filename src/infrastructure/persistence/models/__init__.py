"""Database models for persistence layer.

SQLAlchemy models that map to database tables. These are infrastructure
concerns and should not be imported by the domain layer.

Models Organization:
    - organisation.py: Organisation aggregate root rows
    - membership.py: Membership rows (unique per user and organisation)

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here and are mapped via the repository layer.
"""

from src.infrastructure.persistence.models.membership import Membership
from src.infrastructure.persistence.models.organisation import Organisation

__all__ = [
    "Membership",
    "Organisation",
]
