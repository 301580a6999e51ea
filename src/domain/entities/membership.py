"""Membership child entity.

A membership links a user to an organisation with a role. It is owned by the
Organisation aggregate: role changes and deletion go through the aggregate's
methods, which call the underscore-prefixed mutators here. Nothing outside
``src.domain.entities`` should call them.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.enums.organisation_role import OrganisationRole


@dataclass
class Membership:
    """User membership in an organisation.

    Attributes:
        id: Unique membership identifier.
        user_id: Member (opaque id from the identity provider).
        organisation_id: Back-reference to the owning organisation.
        role: ORG_ADMIN or ORG_MEMBER.
        created_at: When the membership was created.
        updated_at: Last role change or deletion.
        deleted_at: Set once the membership has been removed.
    """

    id: UUID
    user_id: UUID
    organisation_id: UUID
    role: OrganisationRole
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def create(
        cls,
        *,
        organisation_id: UUID,
        user_id: UUID,
        role: OrganisationRole,
    ) -> "Membership":
        now = datetime.now(UTC)
        return cls(
            id=uuid7(),
            user_id=user_id,
            organisation_id=organisation_id,
            role=role,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == OrganisationRole.ORG_ADMIN

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def _change_role(self, new_role: OrganisationRole) -> OrganisationRole:
        """Switch role, returning the role held before the call.

        Assigning the current role leaves the membership untouched
        (updated_at included).
        """
        previous_role = self.role
        if new_role == previous_role:
            return previous_role
        self.role = new_role
        self.updated_at = datetime.now(UTC)
        return previous_role

    def _mark_deleted(self) -> None:
        # Idempotent: the first deletion timestamp wins.
        if self.deleted_at is not None:
            return
        now = datetime.now(UTC)
        self.deleted_at = now
        self.updated_at = now
