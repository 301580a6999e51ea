"""ListOrganisations query handler.

Pages through the organisations the principal can read. The total is
counted under the same access policy as the items.
"""

from src.application.dtos.organisation_dtos import (
    OrganisationListResult,
    OrganisationResult,
)
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.organisation_queries import ListOrganisations
from src.core.result import Failure, Result, Success
from src.domain.protocols.organisation_repository import OrganisationRepository

MAX_PAGE_SIZE = 100


class ListOrganisationsHandler:
    """Handler for ListOrganisations query.

    Dependencies (injected via constructor):
        - OrganisationRepository: Principal-scoped repository
    """

    def __init__(self, organisations: OrganisationRepository) -> None:
        self._organisations = organisations

    async def handle(
        self, query: ListOrganisations
    ) -> Result[OrganisationListResult, ApplicationError]:
        """Handle ListOrganisations query.

        Returns:
            Success(OrganisationListResult): Page of organisations.
            Failure(ApplicationError): limit outside 1-100 or negative offset.
        """
        if not 1 <= query.limit <= MAX_PAGE_SIZE or query.offset < 0:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.QUERY_VALIDATION_FAILED,
                    message=f"limit must be 1-{MAX_PAGE_SIZE} and offset non-negative",
                )
            )

        page = await self._organisations.find_all_paged(
            limit=query.limit, offset=query.offset
        )
        return Success(
            value=OrganisationListResult(
                items=[OrganisationResult.from_entity(o) for o in page.items],
                total=page.total,
                limit=page.limit,
                offset=page.offset,
            )
        )
