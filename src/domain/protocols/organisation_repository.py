"""OrganisationRepository protocol for organisation persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.organisation import Organisation
from src.domain.protocols.repositories import BaseRepository


class OrganisationRepository(BaseRepository[Organisation], Protocol):
    """Organisation repository protocol (port).

    Loading always fetches the full set of active memberships; there is no
    partial or lazy load, so aggregate query helpers are always accurate.

    Saving an existing organisation writes only the memberships that
    actually changed (from ``pull_membership_changes()``), together with the
    parent row, as one batch.
    """

    async def find_by_slug(self, slug: str) -> Organisation | None:
        """Find an active organisation by slug.

        Args:
            slug: Organisation slug.

        Returns:
            Organisation if found and readable by the current principal.
        """
        ...

    async def exists_by_slug(self, slug: str) -> bool:
        """Check whether any organisation (deleted ones included) holds a slug.

        Used before creating or renaming, since slugs stay reserved after a
        soft delete.
        """
        ...

    async def find_for_user(self, user_id: UUID) -> list[Organisation]:
        """List active organisations the user is an active member of."""
        ...

    async def remove_members(self, organisation: Organisation) -> None:
        """Delete the memberships removed from the aggregate.

        Requires write access to the organisation, checked before the
        delete. The organisation is not read back, so an admin may remove
        their own membership.
        """
        ...
