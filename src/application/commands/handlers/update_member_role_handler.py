"""UpdateMemberRole command handler.

Switches a membership between ORG_ADMIN and ORG_MEMBER. Assigning the
current role is a no-op inside the aggregate: no event is recorded and the
save writes no membership rows.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.membership_commands import UpdateMemberRole
from src.application.dtos.organisation_dtos import MembershipResult
from src.application.errors import ApplicationError, from_domain_error
from src.core.result import Failure, Result, Success
from src.domain.entities.membership import Membership
from src.domain.errors import OrganisationNotFoundError
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol


class UpdateMemberRoleHandler:
    """Handler for UpdateMemberRole command."""

    def __init__(
        self,
        organisations: OrganisationRepository,
        uow: UnitOfWorkProtocol,
    ) -> None:
        self._organisations = organisations
        self._uow = uow

    async def handle(
        self, cmd: UpdateMemberRole
    ) -> Result[MembershipResult, ApplicationError]:
        """Handle UpdateMemberRole command.

        Returns:
            Success(MembershipResult): Membership with its (possibly unchanged) role.
            Failure(ApplicationError): Organisation or membership not found.

        Raises:
            PolicyRejectedError: Principal is not an admin of the organisation.
        """

        async def work(
            session: AsyncSession,
        ) -> Result[Membership, ApplicationError]:
            repo = self._organisations.with_transaction(session, self._uow)
            organisation = await repo.find_by_slug(cmd.organisation_slug)
            if organisation is None:
                return Failure(
                    error=from_domain_error(
                        OrganisationNotFoundError.for_slug(cmd.organisation_slug)
                    )
                )

            updated = organisation.update_member_role(cmd.membership_id, cmd.role)
            if isinstance(updated, Failure):
                return Failure(error=from_domain_error(updated.error))

            await repo.save(organisation)
            return Success(value=updated.value)

        result = await self._uow.with_transaction(work)
        if isinstance(result, Failure):
            return result
        return Success(value=MembershipResult.from_entity(result.value))
