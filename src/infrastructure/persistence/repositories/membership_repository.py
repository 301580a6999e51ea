"""MembershipRepository - read-side adapter for memberships.

Memberships are only ever written through the Organisation aggregate, so
this repository is used for queries. Reads go through the membership
access policy: the principal sees memberships of organisations it belongs
to, and never memberships of deleted organisations.
"""

from uuid import UUID

from sqlalchemy import exists, select

from src.domain.entities.membership import Membership
from src.domain.protocols.repositories import Page
from src.infrastructure.persistence.models.membership import (
    Membership as MembershipModel,
)
from src.infrastructure.persistence.repositories.organisation_repository import (
    membership_to_domain,
)
from src.infrastructure.persistence.repositories.repository_base import (
    SQLAlchemyRepositoryBase,
)

_NEWEST_FIRST = (MembershipModel.created_at.desc(), MembershipModel.id.desc())


class MembershipRepository(SQLAlchemyRepositoryBase[Membership, MembershipModel]):
    """SQLAlchemy implementation of MembershipRepository protocol.

    Example:
        >>> repo = MembershipRepository(session, policy=MembershipAccessPolicy(user_id))
        >>> page = await repo.page_for_user(user_id, limit=20, offset=0)
    """

    model = MembershipModel
    resource_type = "membership"

    def _to_domain(self, model: MembershipModel) -> Membership:
        return membership_to_domain(model)

    async def page_for_user(
        self, user_id: UUID, *, limit: int, offset: int
    ) -> Page[Membership]:
        return await self.find_all_paged(
            MembershipModel.user_id == user_id,
            limit=limit,
            offset=offset,
            order_by=_NEWEST_FIRST,
        )

    async def page_for_organisation(
        self, organisation_id: UUID, *, limit: int, offset: int
    ) -> Page[Membership]:
        return await self.find_all_paged(
            MembershipModel.organisation_id == organisation_id,
            limit=limit,
            offset=offset,
        )

    async def find_for_user_in_organisation(
        self, user_id: UUID, organisation_id: UUID
    ) -> Membership | None:
        return await self.find_unique(user_id=user_id, organisation_id=organisation_id)

    async def exists_for_user_in_organisation(
        self, user_id: UUID, organisation_id: UUID
    ) -> bool:
        """Check for a readable membership without loading it."""
        conditions = [
            MembershipModel.user_id == user_id,
            MembershipModel.organisation_id == organisation_id,
        ]
        read_filter = self.policy.read_filter(MembershipModel)
        if read_filter is not None:
            conditions.append(read_filter)
        result = await self.session.execute(select(exists().where(*conditions)))
        return bool(result.scalar())
