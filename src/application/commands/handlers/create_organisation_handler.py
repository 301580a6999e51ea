"""CreateOrganisation command handler.

Creates an organisation with its owner as the first admin member, inside a
unit of work so OrganisationCreated and MemberAdded are published only
after the rows are committed.

The repository passed in must be unrestricted: the new organisation has no
members yet, so no principal-scoped policy could read it back, and slug
checks must see every organisation.

Architecture:
- Application layer handler (orchestrates business logic)
- Imports only from domain layer (entities, protocols, errors)
- Uses Result types for error handling
"""

import secrets
import string

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.organisation_commands import CreateOrganisation
from src.application.dtos.organisation_dtos import OrganisationResult
from src.application.errors import ApplicationError, from_domain_error
from src.core.result import Failure, Result, Success
from src.domain.entities.organisation import Organisation
from src.domain.errors import SlugTakenError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol
from src.domain.validators import (
    SLUG_MAX_LENGTH,
    parse_organisation_name,
    parse_slug,
    slugify,
)


class CreateOrganisationHandler:
    """Handler for CreateOrganisation command.

    Dependencies (injected via constructor):
        - OrganisationRepository: Unrestricted prototype, rebound per transaction
        - UnitOfWorkProtocol: Transaction and event queue
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        organisations: OrganisationRepository,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        *,
        slug_suffix_length: int = 6,
        slug_max_attempts: int = 5,
    ) -> None:
        self._organisations = organisations
        self._uow = uow
        self._logger = logger
        self._suffix_length = slug_suffix_length
        self._max_attempts = slug_max_attempts

    async def handle(
        self, cmd: CreateOrganisation
    ) -> Result[OrganisationResult, ApplicationError]:
        """Handle CreateOrganisation command.

        Returns:
            Success(OrganisationResult): Organisation created.
            Failure(ApplicationError): Invalid name or slug (COMMAND_VALIDATION_FAILED),
                or slug taken / no free slug found (CONFLICT).

        Side Effects:
            - Inserts the organisation and owner membership
            - Publishes OrganisationCreated then MemberAdded after commit
        """
        name_result = parse_organisation_name(cmd.name)
        if isinstance(name_result, Failure):
            return Failure(error=from_domain_error(name_result.error))
        name = name_result.value

        if cmd.slug is not None:
            slug_result = parse_slug(cmd.slug)
            if isinstance(slug_result, Failure):
                return Failure(error=from_domain_error(slug_result.error))

        async def work(
            session: AsyncSession,
        ) -> Result[Organisation, ApplicationError]:
            repo = self._organisations.with_transaction(session, self._uow)

            slug_result = await self._resolve_slug(repo, name, cmd.slug)
            if isinstance(slug_result, Failure):
                return slug_result

            organisation = Organisation.create(
                name=name,
                slug=slug_result.value,
                owner_id=cmd.owner_id,
            )
            await repo.create(organisation)
            return Success(value=organisation)

        result = await self._uow.with_transaction(work)
        if isinstance(result, Failure):
            return result

        organisation = result.value
        self._logger.info(
            "organisation_create_committed",
            organisation_id=str(organisation.id),
            slug=organisation.slug,
        )
        return Success(value=OrganisationResult.from_entity(organisation))

    async def _resolve_slug(
        self,
        repo: OrganisationRepository,
        name: str,
        requested: str | None,
    ) -> Result[str, ApplicationError]:
        """Pick a free slug.

        An explicit slug must be free. A derived slug gets a random suffix
        on collision, up to ``slug_max_attempts`` candidates in total.
        """
        if requested is not None:
            if await repo.exists_by_slug(requested):
                return Failure(error=from_domain_error(SlugTakenError.for_slug(requested)))
            return Success(value=requested)

        base = slugify(name)
        candidate = base
        for _ in range(self._max_attempts):
            if not await repo.exists_by_slug(candidate):
                return Success(value=candidate)
            candidate = self._with_suffix(base)

        self._logger.warning(
            "slug_generation_exhausted",
            base_slug=base,
            attempts=self._max_attempts,
        )
        return Failure(error=from_domain_error(SlugTakenError.for_slug(base)))

    def _with_suffix(self, base: str) -> str:
        suffix = "".join(
            secrets.choice(string.ascii_lowercase) for _ in range(self._suffix_length)
        )
        head = base[: SLUG_MAX_LENGTH - self._suffix_length - 1].rstrip("-")
        return f"{head}-{suffix}"
