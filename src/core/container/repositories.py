"""Repository dependency factories.

Request-scoped repository instances. Each request gets fresh repositories
on the request session, scoped to the calling principal through an access
policy. Command handlers rebind them to their unit of work session with
``repo.with_transaction(session, uow)``.
"""

from typing import TYPE_CHECKING, Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_db_session, get_logger
from src.core.container.principal import get_principal_id

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import (
        MembershipRepository,
        OrganisationRepository,
    )


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_organisation_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    principal_id: Annotated[UUID, Depends(get_principal_id)],
) -> "OrganisationRepository":
    """Get organisation repository scoped to the principal (request-scoped).

    Reads see live organisations the principal is a member of; writes
    need an admin membership.
    """
    from src.infrastructure.authorization import OrganisationAccessPolicy
    from src.infrastructure.persistence.repositories import OrganisationRepository

    return OrganisationRepository(
        session,
        policy=OrganisationAccessPolicy(principal_id),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_unrestricted_organisation_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> "OrganisationRepository":
    """Get organisation repository without row-level policy (request-scoped).

    Only for creating organisations: the new row has no members yet and
    slug checks must see every organisation.
    """
    from src.infrastructure.authorization import UnrestrictedPolicy
    from src.infrastructure.persistence.repositories import OrganisationRepository

    return OrganisationRepository(
        session,
        policy=UnrestrictedPolicy(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_membership_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    principal_id: Annotated[UUID, Depends(get_principal_id)],
) -> "MembershipRepository":
    """Get membership repository scoped to the principal (request-scoped)."""
    from src.infrastructure.authorization import MembershipAccessPolicy
    from src.infrastructure.persistence.repositories import MembershipRepository

    return MembershipRepository(
        session,
        policy=MembershipAccessPolicy(principal_id),
        logger=get_logger(),
    )
