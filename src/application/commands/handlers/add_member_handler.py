"""AddMember command handler.

Loads the organisation aggregate, lets it enforce the one-membership-per-user
rule, and saves the diff. Two concurrent requests for the same user can both
pass the in-memory check; the unique constraint on memberships stops the
second insert and its IntegrityError propagates (409 at the HTTP layer).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.membership_commands import AddMember
from src.application.dtos.organisation_dtos import MembershipResult
from src.application.errors import ApplicationError, from_domain_error
from src.core.result import Failure, Result, Success
from src.domain.entities.membership import Membership
from src.domain.errors import OrganisationNotFoundError
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol


class AddMemberHandler:
    """Handler for AddMember command.

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

    async def handle(self, cmd: AddMember) -> Result[MembershipResult, ApplicationError]:
        """Handle AddMember command.

        Returns:
            Success(MembershipResult): The new membership.
            Failure(ApplicationError): Organisation not found (NOT_FOUND) or
                user already a member (CONFLICT).

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

            added = organisation.add_member(cmd.user_id, cmd.role)
            if isinstance(added, Failure):
                return Failure(error=from_domain_error(added.error))

            await repo.save(organisation)
            return Success(value=added.value)

        result = await self._uow.with_transaction(work)
        if isinstance(result, Failure):
            return result
        return Success(value=MembershipResult.from_entity(result.value))
