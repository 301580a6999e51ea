"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.

Usage:
    from src.domain.protocols import OrganisationRepository, UnitOfWorkProtocol
"""

from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.membership_repository import MembershipRepository
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.repositories import BaseRepository, Page
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol

__all__ = [
    "BaseRepository",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "MembershipRepository",
    "OrganisationRepository",
    "Page",
    "UnitOfWorkProtocol",
]
