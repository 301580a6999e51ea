"""RemoveMember command handler.

Business rules enforced by the aggregate:
- The membership must be active in this organisation
- The organisation owner cannot be removed

Admin permission is checked by the repository before the rows are deleted.
An admin may remove their own membership; the organisation is not read back.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.membership_commands import RemoveMember
from src.application.errors import ApplicationError, from_domain_error
from src.core.result import Failure, Result, Success
from src.domain.errors import OrganisationNotFoundError
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol


class RemoveMemberHandler:
    """Handler for RemoveMember command."""

    def __init__(
        self,
        organisations: OrganisationRepository,
        uow: UnitOfWorkProtocol,
    ) -> None:
        self._organisations = organisations
        self._uow = uow

    async def handle(self, cmd: RemoveMember) -> Result[None, ApplicationError]:
        """Handle RemoveMember command.

        Returns:
            Success(None): Membership removed; MemberRemoved published after commit.
            Failure(ApplicationError): Organisation or membership not found
                (NOT_FOUND), or membership belongs to the owner
                (COMMAND_VALIDATION_FAILED).
        """

        async def work(session: AsyncSession) -> Result[None, ApplicationError]:
            repo = self._organisations.with_transaction(session, self._uow)
            organisation = await repo.find_by_slug(cmd.organisation_slug)
            if organisation is None:
                return Failure(
                    error=from_domain_error(
                        OrganisationNotFoundError.for_slug(cmd.organisation_slug)
                    )
                )

            removed = organisation.remove_member(cmd.membership_id)
            if isinstance(removed, Failure):
                return Failure(error=from_domain_error(removed.error))

            await repo.remove_members(organisation)
            return Success(value=None)

        return await self._uow.with_transaction(work)
