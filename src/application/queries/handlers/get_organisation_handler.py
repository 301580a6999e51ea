"""GetOrganisationBySlug query handler.

Returns DTO (not domain entity) to prevent leaking domain to presentation.
An organisation the principal may not read looks exactly like one that does
not exist.
"""

from src.application.dtos.organisation_dtos import OrganisationResult
from src.application.errors import ApplicationError, from_domain_error
from src.application.queries.organisation_queries import GetOrganisationBySlug
from src.core.result import Failure, Result, Success
from src.domain.errors import OrganisationNotFoundError
from src.domain.protocols.organisation_repository import OrganisationRepository


class GetOrganisationBySlugHandler:
    """Handler for GetOrganisationBySlug query."""

    def __init__(self, organisations: OrganisationRepository) -> None:
        self._organisations = organisations

    async def handle(
        self, query: GetOrganisationBySlug
    ) -> Result[OrganisationResult, ApplicationError]:
        organisation = await self._organisations.find_by_slug(query.slug)
        if organisation is None:
            return Failure(
                error=from_domain_error(OrganisationNotFoundError.for_slug(query.slug))
            )
        return Success(value=OrganisationResult.from_entity(organisation))
