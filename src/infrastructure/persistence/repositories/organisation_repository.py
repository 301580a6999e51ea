"""OrganisationRepository - SQLAlchemy implementation of OrganisationRepository protocol.

Adapter for hexagonal architecture.
Maps between the domain Organisation aggregate (with its memberships) and
the organisations/memberships tables.

Saving an existing aggregate:
    1. Parent row UPDATE under the write filter (admin only).
    2. Membership changes from ``pull_membership_changes()``, in order:
       deletes, role updates, inserts.
    3. Read-back of the whole aggregate under the read filter.

Removing members uses ``remove_members`` instead: an admin check on the
parent row, a DELETE of the removed memberships, and no read-back.

All statements share the repository's session, so inside a unit of work
they commit or roll back together.
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import delete, exists, insert, select, update
from sqlalchemy.orm import selectinload

from src.domain.entities.membership import Membership
from src.domain.entities.organisation import Organisation
from src.domain.enums.organisation_role import OrganisationRole
from src.infrastructure.authorization.organisation_policy import PolicyOperation
from src.infrastructure.persistence.models.membership import (
    Membership as MembershipModel,
)
from src.infrastructure.persistence.models.organisation import (
    Organisation as OrganisationModel,
)
from src.infrastructure.persistence.repositories.repository_base import (
    SQLAlchemyRepositoryBase,
    ensure_utc,
)


def membership_to_domain(model: MembershipModel) -> Membership:
    """Map a membership row to the domain entity."""
    return Membership(
        id=model.id,
        user_id=model.user_id,
        organisation_id=model.organisation_id,
        role=OrganisationRole(model.role),
        created_at=ensure_utc(model.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(model.updated_at),  # type: ignore[arg-type]
        deleted_at=ensure_utc(model.deleted_at),
    )


def membership_row(membership: Membership) -> dict[str, Any]:
    return {
        "id": membership.id,
        "user_id": membership.user_id,
        "organisation_id": membership.organisation_id,
        "role": membership.role.value,
        "created_at": membership.created_at,
        "updated_at": membership.updated_at,
        "deleted_at": membership.deleted_at,
    }


class OrganisationRepository(SQLAlchemyRepositoryBase[Organisation, OrganisationModel]):
    """SQLAlchemy implementation of OrganisationRepository protocol.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Example:
        >>> repo = OrganisationRepository(session, policy=OrganisationAccessPolicy(user_id))
        >>> organisation = await repo.find_by_slug("acme")
    """

    model = OrganisationModel
    resource_type = "organisation"

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _load_options(self) -> Sequence[Any]:
        return (
            selectinload(
                OrganisationModel.memberships.and_(MembershipModel.deleted_at.is_(None))
            ),
        )

    def _to_domain(self, model: OrganisationModel) -> Organisation:
        return Organisation.from_persistence(
            id=model.id,
            name=model.name,
            slug=model.slug,
            owner_id=model.owner_id,
            created_at=ensure_utc(model.created_at),  # type: ignore[arg-type]
            updated_at=ensure_utc(model.updated_at),  # type: ignore[arg-type]
            deleted_at=ensure_utc(model.deleted_at),
            memberships=[
                membership_to_domain(m)
                for m in model.memberships
                if m.deleted_at is None
            ],
        )

    def _to_model(self, entity: Organisation) -> OrganisationModel:
        return OrganisationModel(
            id=entity.id,
            name=entity.name,
            slug=entity.slug,
            owner_id=entity.owner_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            deleted_at=entity.deleted_at,
            memberships=[
                MembershipModel(**membership_row(m)) for m in entity.memberships
            ],
        )

    def _values(self, entity: Organisation) -> dict[str, Any]:
        # owner_id and created_at never change after creation.
        return {
            "name": entity.name,
            "slug": entity.slug,
            "updated_at": entity.updated_at,
            "deleted_at": entity.deleted_at,
        }

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, entity: Organisation) -> Organisation:
        """Insert the organisation with every current membership nested.

        The change tracker is reset first; the nested insert already covers
        whatever it held.
        """
        entity.pull_membership_changes()
        return await super().create(entity)

    async def _write_children(self, entity: Organisation) -> None:
        changes = entity.pull_membership_changes()
        if changes.is_empty:
            return

        if changes.deleted:
            await self.session.execute(
                delete(MembershipModel)
                .where(
                    MembershipModel.organisation_id == entity.id,
                    MembershipModel.id.in_([m.id for m in changes.deleted]),
                )
                .execution_options(synchronize_session=False)
            )

        for membership in changes.updated:
            await self.session.execute(
                update(MembershipModel)
                .where(
                    MembershipModel.id == membership.id,
                    MembershipModel.organisation_id == entity.id,
                )
                .values(role=membership.role.value, updated_at=membership.updated_at)
                .execution_options(synchronize_session=False)
            )

        if changes.created:
            await self.session.execute(
                insert(MembershipModel),
                [membership_row(m) for m in changes.created],
            )

        if self.logger is not None:
            self.logger.debug(
                "membership_changes_written",
                organisation_id=str(entity.id),
                created=len(changes.created),
                updated=len(changes.updated),
                deleted=len(changes.deleted),
            )

    async def remove_members(self, entity: Organisation) -> None:
        """Delete the memberships removed from the aggregate, nothing else.

        The principal must be able to write the organisation when the call
        starts. There is no read-back: an admin removing their own
        membership leaves the organisation unreadable to them, and the
        removal still stands.

        Raises:
            NoResultFound: The organisation does not exist.
            PolicyRejectedError: The write filter excludes the organisation
                (operation=DELETE).
        """
        changes = entity.pull_membership_changes()
        if not changes.deleted:
            return

        conditions = [OrganisationModel.id == entity.id]
        write_filter = self.policy.write_filter(OrganisationModel)
        if write_filter is not None:
            conditions.append(write_filter)
        writable = await self.session.execute(select(exists().where(*conditions)))
        if not writable.scalar():
            await self._classify_miss(entity.id, PolicyOperation.DELETE)

        await self.session.execute(
            delete(MembershipModel)
            .where(
                MembershipModel.organisation_id == entity.id,
                MembershipModel.id.in_([m.id for m in changes.deleted]),
            )
            .execution_options(synchronize_session=False)
        )
        await self._publish_events(entity)

        if self.logger is not None:
            self.logger.debug(
                "memberships_removed",
                organisation_id=str(entity.id),
                deleted=len(changes.deleted),
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def find_by_slug(self, slug: str) -> Organisation | None:
        """Find a readable organisation by slug."""
        return await self.find_first(OrganisationModel.slug == slug)

    async def exists_by_slug(self, slug: str) -> bool:
        """Check whether any row holds the slug, ignoring the access policy.

        Deleted organisations keep their slug reserved, and a slug can be
        taken by an organisation the principal cannot see.
        """
        result = await self.session.execute(
            select(exists().where(OrganisationModel.slug == slug))
        )
        return bool(result.scalar())

    async def find_for_user(self, user_id: UUID) -> list[Organisation]:
        """Readable organisations the user is an active member of."""
        return await self.find_many(
            OrganisationModel.memberships.any(
                (MembershipModel.user_id == user_id)
                & MembershipModel.deleted_at.is_(None)
            )
        )
