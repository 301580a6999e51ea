"""MembershipRepository protocol for membership reads.

Memberships are written only through the Organisation aggregate; this port
covers the read side used by membership queries.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.membership import Membership
from src.domain.protocols.repositories import Page


class MembershipRepository(Protocol):
    """Membership read repository protocol (port)."""

    async def find_by_id(self, membership_id: UUID) -> Membership | None: ...

    async def page_for_user(
        self, user_id: UUID, *, limit: int, offset: int
    ) -> Page[Membership]: ...

    async def page_for_organisation(
        self, organisation_id: UUID, *, limit: int, offset: int
    ) -> Page[Membership]: ...

    async def find_for_user_in_organisation(
        self, user_id: UUID, organisation_id: UUID
    ) -> Membership | None: ...

    async def exists_for_user_in_organisation(
        self, user_id: UUID, organisation_id: UUID
    ) -> bool: ...
