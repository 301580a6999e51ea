"""Handler dependency factories.

Request-scoped command and query handlers. Every command handler gets a
fresh unit of work, so queued events never leak between requests.

Factory names follow ``get_{snake_case_command_or_query}_handler``; the
CQRS registry tests check that every registered command and query has one.
"""

from typing import Annotated

from fastapi import Depends

from src.application.commands.handlers import (
    AddMemberHandler,
    CreateOrganisationHandler,
    DeleteOrganisationHandler,
    RemoveMemberHandler,
    RenameOrganisationHandler,
    UpdateMemberRoleHandler,
)
from src.application.queries import MembershipQueryService
from src.application.queries.handlers import (
    GetOrganisationBySlugHandler,
    ListOrganisationsHandler,
)
from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_database, get_logger
from src.core.container.repositories import (
    get_membership_repository,
    get_organisation_repository,
    get_unrestricted_organisation_repository,
)
from src.infrastructure.persistence.repositories import (
    MembershipRepository,
    OrganisationRepository,
)
from src.infrastructure.persistence.unit_of_work import SQLAlchemyUnitOfWork


def get_unit_of_work() -> SQLAlchemyUnitOfWork:
    """Get a unit of work (request-scoped, one per command)."""
    return SQLAlchemyUnitOfWork(
        database=get_database(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


ScopedOrganisations = Annotated[
    OrganisationRepository, Depends(get_organisation_repository)
]
UnitOfWork = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]


# ============================================================================
# Organisation Command Handlers
# ============================================================================


async def get_create_organisation_handler(
    organisations: Annotated[
        OrganisationRepository, Depends(get_unrestricted_organisation_repository)
    ],
    uow: UnitOfWork,
) -> CreateOrganisationHandler:
    return CreateOrganisationHandler(
        organisations=organisations,
        uow=uow,
        logger=get_logger(),
        slug_suffix_length=settings.slug_suffix_length,
        slug_max_attempts=settings.slug_max_attempts,
    )


async def get_rename_organisation_handler(
    organisations: ScopedOrganisations, uow: UnitOfWork
) -> RenameOrganisationHandler:
    return RenameOrganisationHandler(organisations=organisations, uow=uow)


async def get_delete_organisation_handler(
    organisations: ScopedOrganisations, uow: UnitOfWork
) -> DeleteOrganisationHandler:
    return DeleteOrganisationHandler(organisations=organisations, uow=uow)


# ============================================================================
# Membership Command Handlers
# ============================================================================


async def get_add_member_handler(
    organisations: ScopedOrganisations, uow: UnitOfWork
) -> AddMemberHandler:
    return AddMemberHandler(organisations=organisations, uow=uow)


async def get_remove_member_handler(
    organisations: ScopedOrganisations, uow: UnitOfWork
) -> RemoveMemberHandler:
    return RemoveMemberHandler(organisations=organisations, uow=uow)


async def get_update_member_role_handler(
    organisations: ScopedOrganisations, uow: UnitOfWork
) -> UpdateMemberRoleHandler:
    return UpdateMemberRoleHandler(organisations=organisations, uow=uow)


# ============================================================================
# Query Handlers
# ============================================================================


async def get_get_organisation_by_slug_handler(
    organisations: ScopedOrganisations,
) -> GetOrganisationBySlugHandler:
    return GetOrganisationBySlugHandler(organisations=organisations)


async def get_list_organisations_handler(
    organisations: ScopedOrganisations,
) -> ListOrganisationsHandler:
    return ListOrganisationsHandler(organisations=organisations)


async def get_membership_query_service(
    memberships: Annotated[MembershipRepository, Depends(get_membership_repository)],
    organisations: ScopedOrganisations,
) -> MembershipQueryService:
    return MembershipQueryService(memberships=memberships, organisations=organisations)
