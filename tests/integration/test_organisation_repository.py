"""Integration tests for OrganisationRepository against SQLite.

Each test gets a fresh database file. Rows are set up with an unrestricted
repository and then exercised through principal-scoped repositories.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound

from src.domain.entities.organisation import Organisation
from src.domain.enums import OrganisationRole
from src.domain.events import (
    MemberAdded,
    MemberRemoved,
    OrganisationCreated,
    OrganisationDeleted,
)
from src.infrastructure.authorization import (
    OrganisationAccessPolicy,
    PolicyOperation,
    PolicyRejectedError,
    UnrestrictedPolicy,
)
from src.infrastructure.persistence.models.membership import (
    Membership as MembershipModel,
)
from src.infrastructure.persistence.models.organisation import (
    Organisation as OrganisationModel,
)
from src.infrastructure.persistence.repositories import (
    MembershipRepository,
    OrganisationRepository,
    SQLAlchemyRepositoryBase,
)


async def _persist(database, organisation: Organisation) -> Organisation:
    async with database.get_session() as session:
        await OrganisationRepository(session, policy=UnrestrictedPolicy()).create(
            organisation
        )
    organisation.pull_events()
    return organisation


async def _load(database, slug: str, principal_id=None) -> Organisation | None:
    policy = (
        UnrestrictedPolicy()
        if principal_id is None
        else OrganisationAccessPolicy(principal_id)
    )
    async with database.get_session() as session:
        return await OrganisationRepository(session, policy=policy).find_by_slug(slug)


@pytest.mark.integration
class TestCreateAndRead:
    async def test_create_persists_owner_membership(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())

        loaded = await _load(database, organisation.slug)

        assert loaded.id == organisation.id
        assert loaded.name == organisation.name
        assert loaded.owner_id == organisation.owner_id
        assert [m.user_id for m in loaded.memberships] == [organisation.owner_id]
        assert loaded.memberships[0].role == OrganisationRole.ORG_ADMIN
        assert loaded.created_at.tzinfo is not None
        assert not loaded.has_pending_events

    async def test_save_creates_when_row_missing(self, database, make_organisation):
        organisation = make_organisation()

        async with database.get_session() as session:
            repo = OrganisationRepository(session, policy=UnrestrictedPolicy())
            await repo.save(organisation)

        assert await _load(database, organisation.slug) is not None

    async def test_find_for_user(self, database, make_organisation):
        user_id = uuid4()
        mine = await _persist(database, make_organisation(owner_id=user_id))
        await _persist(database, make_organisation())

        async with database.get_session() as session:
            repo = OrganisationRepository(session, policy=UnrestrictedPolicy())
            found = await repo.find_for_user(user_id)

        assert [o.id for o in found] == [mine.id]

    async def test_exists_by_slug_ignores_policy_and_deletion(
        self, database, make_organisation
    ):
        organisation = make_organisation()
        organisation.delete()
        await _persist(database, organisation)

        async with database.get_session() as session:
            repo = OrganisationRepository(
                session, policy=OrganisationAccessPolicy(uuid4())
            )
            assert await repo.exists_by_slug(organisation.slug)
            assert not await repo.exists_by_slug("never-used")
            assert await repo.find_by_slug(organisation.slug) is None

    async def test_paged_listing_counts_under_policy(self, database, make_organisation):
        principal = uuid4()
        for _ in range(3):
            await _persist(database, make_organisation(owner_id=principal))
        await _persist(database, make_organisation())

        async with database.get_session() as session:
            repo = OrganisationRepository(
                session, policy=OrganisationAccessPolicy(principal)
            )
            page = await repo.find_all_paged(limit=2, offset=0)
            rest = await repo.find_all_paged(limit=2, offset=2)

        assert page.total == 3
        assert len(page.items) == 2
        assert len(rest.items) == 1
        assert {o.id for o in page.items}.isdisjoint({o.id for o in rest.items})


@pytest.mark.integration
class TestMembershipDiff:
    async def test_add_update_remove_round_trip(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())
        loaded = await _load(database, organisation.slug)
        alice = loaded.add_member(uuid4()).value
        bob = loaded.add_member(uuid4(), OrganisationRole.ORG_ADMIN).value

        async with database.get_session() as session:
            await OrganisationRepository(session, policy=UnrestrictedPolicy()).save(
                loaded
            )

        reloaded = await _load(database, organisation.slug)
        reloaded.update_member_role(alice.id, OrganisationRole.ORG_ADMIN)
        reloaded.remove_member(bob.id)

        async with database.get_session() as session:
            await OrganisationRepository(session, policy=UnrestrictedPolicy()).save(
                reloaded
            )

        final = await _load(database, organisation.slug)
        roles = {m.user_id: m.role for m in final.memberships}
        assert roles == {
            organisation.owner_id: OrganisationRole.ORG_ADMIN,
            alice.user_id: OrganisationRole.ORG_ADMIN,
        }

    async def test_concurrent_add_of_same_user_hits_unique_constraint(
        self, database, make_organisation
    ):
        organisation = await _persist(database, make_organisation())
        first = await _load(database, organisation.slug)
        second = await _load(database, organisation.slug)
        user_id = uuid4()
        first.add_member(user_id)
        second.add_member(user_id)

        async with database.get_session() as session:
            await OrganisationRepository(session, policy=UnrestrictedPolicy()).save(
                first
            )

        with pytest.raises(IntegrityError):
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=UnrestrictedPolicy()
                ).save(second)


@pytest.mark.integration
class TestAccessPolicy:
    async def test_non_member_cannot_read(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())

        assert await _load(database, organisation.slug, uuid4()) is None

    async def test_member_can_read(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())

        loaded = await _load(database, organisation.slug, organisation.owner_id)

        assert loaded is not None

    async def test_plain_member_cannot_write(self, database, make_organisation):
        organisation = make_organisation()
        member = organisation.add_member(uuid4()).value
        await _persist(database, organisation)
        loaded = await _load(database, organisation.slug, member.user_id)
        loaded.rename("Hijacked")

        with pytest.raises(PolicyRejectedError) as exc_info:
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=OrganisationAccessPolicy(member.user_id)
                ).save(loaded)

        assert exc_info.value.operation == PolicyOperation.UPDATE
        assert exc_info.value.resource_id == organisation.id
        assert (await _load(database, organisation.slug)).name == organisation.name

    async def test_admin_can_write(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())
        loaded = await _load(database, organisation.slug, organisation.owner_id)
        loaded.rename("Acme Renamed", "acme-renamed-" + uuid4().hex[:6])

        async with database.get_session() as session:
            stored = await OrganisationRepository(
                session, policy=OrganisationAccessPolicy(organisation.owner_id)
            ).save(loaded)

        assert stored.name == "Acme Renamed"
        assert stored.slug == loaded.slug

    async def test_admin_can_remove_own_membership(self, database, make_organisation):
        organisation = make_organisation()
        admin = organisation.add_member(uuid4(), OrganisationRole.ORG_ADMIN).value
        await _persist(database, organisation)
        loaded = await _load(database, organisation.slug, admin.user_id)
        loaded.remove_member(admin.id)
        uow = MagicMock()

        async with database.get_session() as session:
            await OrganisationRepository(
                session, policy=OrganisationAccessPolicy(admin.user_id)
            ).with_transaction(session, uow).remove_members(loaded)

        (events,), _ = uow.queue.call_args
        assert [type(e) for e in events] == [MemberRemoved]
        assert await _load(database, organisation.slug, admin.user_id) is None
        remaining = await _load(database, organisation.slug)
        assert [m.user_id for m in remaining.memberships] == [organisation.owner_id]

    async def test_plain_member_cannot_remove_members(
        self, database, make_organisation
    ):
        organisation = make_organisation()
        member = organisation.add_member(uuid4()).value
        other = organisation.add_member(uuid4()).value
        await _persist(database, organisation)
        loaded = await _load(database, organisation.slug, member.user_id)
        loaded.remove_member(other.id)

        with pytest.raises(PolicyRejectedError) as exc_info:
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=OrganisationAccessPolicy(member.user_id)
                ).remove_members(loaded)

        assert exc_info.value.operation == PolicyOperation.DELETE
        assert (await _load(database, organisation.slug)).has_member(other.user_id)

    async def test_remove_members_on_missing_organisation(
        self, database, make_organisation
    ):
        organisation = make_organisation()
        member = organisation.add_member(uuid4()).value
        organisation.pull_membership_changes()
        organisation.remove_member(member.id)

        with pytest.raises(NoResultFound):
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=UnrestrictedPolicy()
                ).remove_members(organisation)


@pytest.mark.integration
class TestSoftDelete:
    async def test_admin_soft_delete_hides_row(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())
        loaded = await _load(database, organisation.slug, organisation.owner_id)
        loaded.delete()

        async with database.get_session() as session:
            await OrganisationRepository(
                session, policy=OrganisationAccessPolicy(organisation.owner_id)
            ).soft_delete(loaded)

        assert await _load(database, organisation.slug, organisation.owner_id) is None
        hidden = await _load(database, organisation.slug)
        assert hidden.deleted_at is not None

    async def test_plain_member_soft_delete_rejected(self, database, make_organisation):
        organisation = make_organisation()
        member = organisation.add_member(uuid4()).value
        await _persist(database, organisation)
        loaded = await _load(database, organisation.slug, member.user_id)
        loaded.delete()

        with pytest.raises(PolicyRejectedError) as exc_info:
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=OrganisationAccessPolicy(member.user_id)
                ).soft_delete(loaded)

        assert exc_info.value.operation == PolicyOperation.UPDATE
        assert (await _load(database, organisation.slug)).deleted_at is None


@pytest.mark.integration
class TestEventHandOff:
    async def test_bound_uow_receives_events(self, database, make_organisation):
        organisation = make_organisation()
        uow = MagicMock()
        bus = AsyncMock()

        async with database.get_session() as session:
            repo = OrganisationRepository(
                session, policy=UnrestrictedPolicy(), event_bus=bus
            ).with_transaction(session, uow)
            await repo.create(organisation)

        (events,), _ = uow.queue.call_args
        assert [type(e) for e in events] == [OrganisationCreated, MemberAdded]
        bus.publish.assert_not_awaited()
        assert not organisation.has_pending_events

    async def test_event_bus_publishes_without_uow(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())
        loaded = await _load(database, organisation.slug)
        loaded.delete()
        bus = AsyncMock()

        async with database.get_session() as session:
            await OrganisationRepository(
                session, policy=UnrestrictedPolicy(), event_bus=bus
            ).soft_delete(loaded)

        (event,), _ = bus.publish.call_args
        assert isinstance(event, OrganisationDeleted)

    async def test_events_restored_without_uow_or_bus(
        self, database, make_organisation
    ):
        organisation = make_organisation()

        async with database.get_session() as session:
            await OrganisationRepository(session, policy=UnrestrictedPolicy()).create(
                organisation
            )

        assert [type(e) for e in organisation.pull_events()] == [
            OrganisationCreated,
            MemberAdded,
        ]

    async def test_with_transaction_returns_bound_copy(self, database):
        uow = MagicMock()
        async with database.get_session() as first, database.get_session() as second:
            prototype = OrganisationRepository(first, policy=UnrestrictedPolicy())

            bound = prototype.with_transaction(second, uow)

            assert bound is not prototype
            assert bound.session is second
            assert bound.uow is uow
            assert prototype.session is first
            assert prototype.uow is None
            assert bound.policy is prototype.policy


@pytest.mark.integration
class TestBaseOperations:
    async def test_delete_removes_row_and_memberships(
        self, database, make_organisation
    ):
        organisation = await _persist(database, make_organisation())

        async with database.get_session() as session:
            await OrganisationRepository(session, policy=UnrestrictedPolicy()).delete(
                organisation
            )

        async with database.get_session() as session:
            organisations = OrganisationRepository(session, policy=UnrestrictedPolicy())
            memberships = MembershipRepository(session, policy=UnrestrictedPolicy())
            assert not await organisations.exists_by_slug(organisation.slug)
            assert (
                await memberships.count(
                    MembershipModel.organisation_id == organisation.id
                )
                == 0
            )

    async def test_delete_rejected_for_plain_member(self, database, make_organisation):
        organisation = make_organisation()
        member = organisation.add_member(uuid4()).value
        await _persist(database, organisation)

        with pytest.raises(PolicyRejectedError) as exc_info:
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=OrganisationAccessPolicy(member.user_id)
                ).delete(organisation)

        assert exc_info.value.operation == PolicyOperation.DELETE
        assert await _load(database, organisation.slug) is not None

    async def test_delete_missing_row(self, database, make_organisation):
        with pytest.raises(NoResultFound):
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=UnrestrictedPolicy()
                ).delete(make_organisation())

    async def test_upsert_creates_then_updates(self, database, make_organisation):
        organisation = make_organisation()

        async with database.get_session() as session:
            await OrganisationRepository(session, policy=UnrestrictedPolicy()).upsert(
                organisation
            )
        loaded = await _load(database, organisation.slug)
        loaded.rename("Acme Upserted")
        async with database.get_session() as session:
            stored = await OrganisationRepository(
                session, policy=UnrestrictedPolicy()
            ).upsert(loaded)

        assert stored.id == organisation.id
        assert stored.name == "Acme Upserted"
        assert (await _load(database, organisation.slug)).name == "Acme Upserted"

    async def test_find_unique_applies_read_filter(self, database, make_organisation):
        organisation = await _persist(database, make_organisation())

        async with database.get_session() as session:
            owner_view = OrganisationRepository(
                session, policy=OrganisationAccessPolicy(organisation.owner_id)
            )
            outsider_view = OrganisationRepository(
                session, policy=OrganisationAccessPolicy(uuid4())
            )
            found = await owner_view.find_unique(slug=organisation.slug)
            hidden = await outsider_view.find_unique(slug=organisation.slug)

        assert found.id == organisation.id
        assert hidden is None

    async def test_count_applies_read_filter_and_where(
        self, database, make_organisation
    ):
        principal = uuid4()
        first = await _persist(database, make_organisation(owner_id=principal))
        await _persist(database, make_organisation(owner_id=principal))
        await _persist(database, make_organisation())

        async with database.get_session() as session:
            scoped = OrganisationRepository(
                session, policy=OrganisationAccessPolicy(principal)
            )
            unrestricted = OrganisationRepository(session, policy=UnrestrictedPolicy())
            assert await scoped.count() == 2
            assert await unrestricted.count() == 3
            assert await scoped.count(OrganisationModel.slug == first.slug) == 1

    async def test_soft_delete_logs_hidden_row_not_rejection(
        self, database, make_organisation, mock_logger
    ):
        organisation = await _persist(database, make_organisation())
        loaded = await _load(database, organisation.slug, organisation.owner_id)
        loaded.delete()

        async with database.get_session() as session:
            await OrganisationRepository(
                session,
                policy=OrganisationAccessPolicy(organisation.owner_id),
                logger=mock_logger,
            ).soft_delete(loaded)

        mock_logger.info.assert_not_called()
        mock_logger.debug.assert_any_call(
            "soft_deleted_row_hidden",
            resource_type="organisation",
            resource_id=str(organisation.id),
        )

    async def test_soft_delete_missing_row(self, database, make_organisation):
        with pytest.raises(NoResultFound):
            async with database.get_session() as session:
                await OrganisationRepository(
                    session, policy=UnrestrictedPolicy()
                ).soft_delete(make_organisation())


@pytest.mark.integration
class TestMappingHooks:
    def test_to_domain_is_required(self):
        class Incomplete(SQLAlchemyRepositoryBase):
            model = OrganisationModel

        with pytest.raises(TypeError):
            Incomplete(MagicMock(), policy=UnrestrictedPolicy())

    async def test_read_only_repository_cannot_create(self, database):
        membership = Organisation.create(
            name="Acme Labs", slug="acme-labs", owner_id=uuid4()
        ).owner_membership

        async with database.get_session() as session:
            repo = MembershipRepository(session, policy=UnrestrictedPolicy())
            with pytest.raises(NotImplementedError, match="_to_model"):
                await repo.create(membership)
