"""DeleteOrganisation command handler.

Soft-deletes an organisation. The row stays (and keeps its slug reserved)
but disappears from every principal-scoped read, so the repository's
read-back after the write is expected to fail and is treated as success.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.organisation_commands import DeleteOrganisation
from src.application.errors import ApplicationError, from_domain_error
from src.core.result import Failure, Result, Success
from src.domain.errors import OrganisationNotFoundError
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol


class DeleteOrganisationHandler:
    """Handler for DeleteOrganisation command."""

    def __init__(
        self,
        organisations: OrganisationRepository,
        uow: UnitOfWorkProtocol,
    ) -> None:
        self._organisations = organisations
        self._uow = uow

    async def handle(self, cmd: DeleteOrganisation) -> Result[None, ApplicationError]:
        """Handle DeleteOrganisation command.

        Returns:
            Success(None): Organisation soft-deleted; OrganisationDeleted
                published after commit.
            Failure(ApplicationError): Organisation not found (NOT_FOUND).

        Raises:
            PolicyRejectedError: Principal is not an admin of the organisation.
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

            organisation.delete()
            await repo.soft_delete(organisation)
            return Success(value=None)

        return await self._uow.with_transaction(work)
