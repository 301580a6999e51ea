"""Membership query service.

Read-only access to memberships for cross-organisation queries. Unlike
the command handlers it does not load whole aggregates; it reads
membership rows directly through the membership access policy, so a
principal only sees memberships of organisations it belongs to.

Used by:
    - GET /users/me/memberships (memberships across all organisations)
    - GET /organisations/{slug}/memberships (memberships of one organisation)
    - GET /organisations/{slug}/memberships/{membership_id} (one membership)
"""

from uuid import UUID

from src.application.dtos.organisation_dtos import MembershipResult
from src.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)
from src.core.result import Failure, Result, Success
from src.domain.errors import MembershipNotFoundError, OrganisationNotFoundError
from src.domain.protocols.membership_repository import MembershipRepository
from src.domain.protocols.organisation_repository import OrganisationRepository
from src.domain.protocols.repositories import Page

MAX_PAGE_SIZE = 100


class MembershipQueryService:
    """Membership read service.

    Dependencies (injected via constructor):
        - MembershipRepository: Principal-scoped membership reads
        - OrganisationRepository: Principal-scoped, resolves slugs
    """

    def __init__(
        self,
        memberships: MembershipRepository,
        organisations: OrganisationRepository,
    ) -> None:
        self._memberships = memberships
        self._organisations = organisations

    async def list_user_memberships(
        self, user_id: UUID, *, limit: int = 20, offset: int = 0
    ) -> Result[Page[MembershipResult], ApplicationError]:
        """Memberships of a user, newest first."""
        invalid = _check_page(limit, offset)
        if invalid is not None:
            return Failure(error=invalid)
        page = await self._memberships.page_for_user(user_id, limit=limit, offset=offset)
        return Success(value=_to_results(page))

    async def list_organisation_memberships(
        self, organisation_id: UUID, *, limit: int = 20, offset: int = 0
    ) -> Result[Page[MembershipResult], ApplicationError]:
        """Memberships of an organisation, oldest first."""
        invalid = _check_page(limit, offset)
        if invalid is not None:
            return Failure(error=invalid)
        page = await self._memberships.page_for_organisation(
            organisation_id, limit=limit, offset=offset
        )
        return Success(value=_to_results(page))

    async def list_organisation_memberships_by_slug(
        self, slug: str, *, limit: int = 20, offset: int = 0
    ) -> Result[Page[MembershipResult], ApplicationError]:
        """Same as ``list_organisation_memberships``, addressed by slug.

        Returns:
            Failure(NOT_FOUND) when the organisation is not readable.
        """
        organisation = await self._organisations.find_by_slug(slug)
        if organisation is None:
            return Failure(
                error=from_domain_error(OrganisationNotFoundError.for_slug(slug))
            )
        return await self.list_organisation_memberships(
            organisation.id, limit=limit, offset=offset
        )

    async def get_membership(
        self, membership_id: UUID
    ) -> Result[MembershipResult, ApplicationError]:
        membership = await self._memberships.find_by_id(membership_id)
        if membership is None:
            return Failure(
                error=from_domain_error(MembershipNotFoundError.for_id(membership_id))
            )
        return Success(value=MembershipResult.from_entity(membership))

    async def get_organisation_membership(
        self, slug: str, membership_id: UUID
    ) -> Result[MembershipResult, ApplicationError]:
        """``get_membership``, but only when it belongs to the organisation ``slug``.

        A membership of another organisation is reported as not found.
        """
        found = await self.get_membership(membership_id)
        if isinstance(found, Failure):
            return found
        organisation = await self._organisations.find_by_slug(slug)
        if organisation is None or organisation.id != found.value.organisation_id:
            return Failure(
                error=from_domain_error(MembershipNotFoundError.for_id(membership_id))
            )
        return found

    async def get_membership_for_user(
        self, user_id: UUID, organisation_id: UUID
    ) -> MembershipResult | None:
        membership = await self._memberships.find_for_user_in_organisation(
            user_id, organisation_id
        )
        return None if membership is None else MembershipResult.from_entity(membership)

    async def membership_exists(self, user_id: UUID, organisation_id: UUID) -> bool:
        return await self._memberships.exists_for_user_in_organisation(
            user_id, organisation_id
        )


def _check_page(limit: int, offset: int) -> ApplicationError | None:
    if 1 <= limit <= MAX_PAGE_SIZE and offset >= 0:
        return None
    return ApplicationError(
        code=ApplicationErrorCode.QUERY_VALIDATION_FAILED,
        message=f"limit must be 1-{MAX_PAGE_SIZE} and offset non-negative",
    )


def _to_results(page: Page) -> Page[MembershipResult]:
    return Page(
        items=[MembershipResult.from_entity(m) for m in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )
