"""RenameOrganisation command handler.

Renames an organisation and optionally moves it to a new slug. Only admins
can write the organisation row; for anyone else the repository raises
PolicyRejectedError, which the presentation layer turns into 403.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.organisation_commands import RenameOrganisation
from src.application.dtos.organisation_dtos import OrganisationResult
from src.application.errors import ApplicationError, from_domain_error
from src.core.result import Failure, Result, Success
from src.domain.entities.organisation import Organisation
from src.domain.errors import OrganisationNotFoundError, SlugTakenError
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol
from src.domain.validators import parse_organisation_name, parse_slug


class RenameOrganisationHandler:
    """Handler for RenameOrganisation command.

    Dependencies (injected via constructor):
        - OrganisationRepository: Principal-scoped prototype
        - UnitOfWorkProtocol: Transaction and event queue
    """

    def __init__(
        self,
        organisations: OrganisationRepository,
        uow: UnitOfWorkProtocol,
    ) -> None:
        self._organisations = organisations
        self._uow = uow

    async def handle(
        self, cmd: RenameOrganisation
    ) -> Result[OrganisationResult, ApplicationError]:
        """Handle RenameOrganisation command.

        Returns:
            Success(OrganisationResult): Organisation as stored after the rename.
            Failure(ApplicationError): Invalid input, unknown organisation, or
                slug already taken.

        Raises:
            PolicyRejectedError: Principal is not an admin of the organisation.
        """
        name_result = parse_organisation_name(cmd.name)
        if isinstance(name_result, Failure):
            return Failure(error=from_domain_error(name_result.error))
        if cmd.slug is not None:
            slug_result = parse_slug(cmd.slug)
            if isinstance(slug_result, Failure):
                return Failure(error=from_domain_error(slug_result.error))

        async def work(
            session: AsyncSession,
        ) -> Result[Organisation, ApplicationError]:
            repo = self._organisations.with_transaction(session, self._uow)
            organisation = await repo.find_by_slug(cmd.organisation_slug)
            if organisation is None:
                return Failure(
                    error=from_domain_error(
                        OrganisationNotFoundError.for_slug(cmd.organisation_slug)
                    )
                )

            new_slug = cmd.slug if cmd.slug != organisation.slug else None
            if new_slug is not None and await repo.exists_by_slug(new_slug):
                return Failure(error=from_domain_error(SlugTakenError.for_slug(new_slug)))

            organisation.rename(name_result.value, new_slug)
            return Success(value=await repo.save(organisation))

        result = await self._uow.with_transaction(work)
        if isinstance(result, Failure):
            return result
        return Success(value=OrganisationResult.from_entity(result.value))
