"""Organisation aggregate root.

The Organisation owns its memberships and is the only way to change them.
All invariant checks happen in memory and never await, so a check and the
mutation it guards cannot interleave with other work on the same instance.

Business Rules:
    - Exactly one active membership per user.
    - The owner's membership is created with the organisation (ORG_ADMIN)
      and can never be removed.
    - Assigning a member their current role is a no-op (no event, no write).
    - delete() is idempotent and only ever soft-deletes.

The aggregate does NOT check who is calling. Admin-only operations are
guarded by the row-level access policy at the repository boundary, so by
the time an aggregate method runs the caller has already been authorized.

Change tracking:
    Every mutation records which memberships must be inserted, updated or
    deleted. The repository calls ``pull_membership_changes()`` once per
    save to get the diff and reset the tracker; a second pull in the same
    cycle returns an empty change set.

Example:
    >>> organisation = Organisation.create(name="Acme", slug="acme", owner_id=u1)
    >>> match organisation.add_member(u2, OrganisationRole.ORG_MEMBER):
    ...     case Success(value=membership):
    ...         ...
    ...     case Failure(error=DuplicateMembershipError()):
    ...         ...
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.entities.membership import Membership
from src.domain.enums.organisation_role import OrganisationRole
from src.domain.errors.organisation_error import (
    DuplicateMembershipError,
    MembershipNotFoundError,
    OwnerRemovalError,
)
from src.domain.events.organisation_events import (
    MemberAdded,
    MemberRemoved,
    MemberRoleChanged,
    OrganisationCreated,
    OrganisationDeleted,
)
from src.domain.value_objects.membership_changes import MembershipChanges


@dataclass
class Organisation(AggregateRoot):
    """Organisation aggregate root.

    Attributes:
        id: Unique organisation identifier.
        name: Display name.
        slug: Unique URL-safe identifier.
        owner_id: User who created the organisation. Immutable.
        created_at: Creation timestamp.
        updated_at: Last mutation of the organisation or its memberships.
        deleted_at: Soft-delete timestamp, None while active.
    """

    id: UUID
    name: str
    slug: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    _memberships: list[Membership] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _created_ids: set[UUID] = field(
        default_factory=set, init=False, repr=False, compare=False
    )
    _updated_ids: set[UUID] = field(
        default_factory=set, init=False, repr=False, compare=False
    )
    _deleted: list[Membership] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, *, name: str, slug: str, owner_id: UUID) -> "Organisation":
        """Create a new organisation with the owner as its first admin.

        The slug must already be known to be unique; checking that needs a
        database round-trip and belongs to the application layer.

        Records OrganisationCreated followed by MemberAdded for the owner.
        """
        now = datetime.now(UTC)
        organisation = cls(
            id=uuid7(),
            name=name,
            slug=slug,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        owner = Membership.create(
            organisation_id=organisation.id,
            user_id=owner_id,
            role=OrganisationRole.ORG_ADMIN,
        )
        organisation._memberships.append(owner)
        organisation._created_ids.add(owner.id)

        organisation._record_event(
            OrganisationCreated(
                organisation_id=organisation.id,
                name=name,
                slug=slug,
                owner_id=owner_id,
            )
        )
        organisation._record_event(
            MemberAdded(
                membership_id=owner.id,
                organisation_id=organisation.id,
                user_id=owner_id,
                role=owner.role,
            )
        )
        return organisation

    @classmethod
    def from_persistence(
        cls,
        *,
        id: UUID,
        name: str,
        slug: str,
        owner_id: UUID,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None = None,
        memberships: Iterable[Membership] = (),
    ) -> "Organisation":
        """Rehydrate from storage. Records no events; input is trusted."""
        organisation = cls(
            id=id,
            name=name,
            slug=slug,
            owner_id=owner_id,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )
        organisation._memberships = list(memberships)
        return organisation

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def memberships(self) -> tuple[Membership, ...]:
        """Active memberships, in insertion order."""
        return tuple(self._memberships)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def owner_membership(self) -> Membership | None:
        return self.get_membership_by_user_id(self.owner_id)

    def get_membership_by_id(self, membership_id: UUID) -> Membership | None:
        return next((m for m in self._memberships if m.id == membership_id), None)

    def get_membership_by_user_id(self, user_id: UUID) -> Membership | None:
        return next((m for m in self._memberships if m.user_id == user_id), None)

    def has_member(self, user_id: UUID) -> bool:
        return self.get_membership_by_user_id(user_id) is not None

    def is_admin(self, user_id: UUID) -> bool:
        membership = self.get_membership_by_user_id(user_id)
        return membership is not None and membership.is_admin

    def is_owner(self, user_id: UUID) -> bool:
        return user_id == self.owner_id

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def add_member(
        self,
        user_id: UUID,
        role: OrganisationRole = OrganisationRole.ORG_MEMBER,
    ) -> Result[Membership, DuplicateMembershipError]:
        """Add a user to the organisation.

        Only active memberships count towards the duplicate check.

        Returns:
            Success(Membership): The new membership.
            Failure(DuplicateMembershipError): User is already a member.
        """
        if self.has_member(user_id):
            return Failure(
                error=DuplicateMembershipError.for_user(self.id, user_id)
            )

        membership = Membership.create(
            organisation_id=self.id,
            user_id=user_id,
            role=role,
        )
        self._memberships.append(membership)
        self._created_ids.add(membership.id)
        self._touch()

        self._record_event(
            MemberAdded(
                membership_id=membership.id,
                organisation_id=self.id,
                user_id=user_id,
                role=role,
            )
        )
        return Success(value=membership)

    def remove_member(
        self, membership_id: UUID
    ) -> Result[None, MembershipNotFoundError | OwnerRemovalError]:
        """Remove a membership.

        The membership is marked deleted, dropped from the active collection
        and kept as a snapshot until the next pull of membership changes.

        Returns:
            Success(None): Membership removed.
            Failure(MembershipNotFoundError): No such active membership.
            Failure(OwnerRemovalError): Membership belongs to the owner.
        """
        membership = self.get_membership_by_id(membership_id)
        if membership is None:
            return Failure(error=MembershipNotFoundError.for_id(membership_id))
        if membership.user_id == self.owner_id:
            return Failure(error=OwnerRemovalError.for_membership(membership_id))

        membership._mark_deleted()
        self._memberships.remove(membership)
        self._updated_ids.discard(membership.id)
        if membership.id in self._created_ids:
            # Added in this cycle and never written: no row to delete, so no
            # deleted snapshot either.
            self._created_ids.discard(membership.id)
        else:
            self._deleted.append(replace(membership))
        self._touch()

        assert membership.deleted_at is not None
        self._record_event(
            MemberRemoved(
                membership_id=membership.id,
                organisation_id=self.id,
                user_id=membership.user_id,
                deleted_at=membership.deleted_at,
            )
        )
        return Success(value=None)

    def update_member_role(
        self,
        membership_id: UUID,
        new_role: OrganisationRole,
    ) -> Result[Membership, MembershipNotFoundError]:
        """Change a member's role.

        Assigning the current role returns the membership unchanged without
        recording an event or a pending change.

        Returns:
            Success(Membership): The (possibly unchanged) membership.
            Failure(MembershipNotFoundError): No such active membership.
        """
        membership = self.get_membership_by_id(membership_id)
        if membership is None:
            return Failure(error=MembershipNotFoundError.for_id(membership_id))
        if membership.role == new_role:
            return Success(value=membership)

        previous_role = membership._change_role(new_role)
        if membership.id not in self._created_ids:
            self._updated_ids.add(membership.id)
        self._touch()

        self._record_event(
            MemberRoleChanged(
                membership_id=membership.id,
                organisation_id=self.id,
                user_id=membership.user_id,
                previous_role=previous_role,
                new_role=new_role,
            )
        )
        return Success(value=membership)

    def rename(self, new_name: str, new_slug: str | None = None) -> None:
        """Rename the organisation, optionally changing its slug.

        Slug uniqueness must be re-checked by the caller.
        """
        self.name = new_name
        if new_slug is not None:
            self.slug = new_slug
        self._touch()

    def delete(self) -> None:
        """Soft-delete the organisation. A second call does nothing."""
        if self.deleted_at is not None:
            return
        now = datetime.now(UTC)
        self.deleted_at = now
        self.updated_at = now
        self._record_event(
            OrganisationDeleted(
                organisation_id=self.id,
                slug=self.slug,
                deleted_at=now,
            )
        )

    # -------------------------------------------------------------------------
    # Change tracking
    # -------------------------------------------------------------------------

    def pull_membership_changes(self) -> MembershipChanges:
        """Return the membership diff and reset the tracker.

        Call exactly once per persistence round-trip. A second call in the
        same cycle returns an empty change set.
        """
        changes = MembershipChanges(
            created=tuple(m for m in self._memberships if m.id in self._created_ids),
            updated=tuple(m for m in self._memberships if m.id in self._updated_ids),
            deleted=tuple(self._deleted),
        )
        self._created_ids.clear()
        self._updated_ids.clear()
        self._deleted.clear()
        return changes

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)
