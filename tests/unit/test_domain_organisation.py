"""Unit tests for the Organisation aggregate.

Tests cover:
- create(): owner membership, event order, change tracker
- from_persistence(): no events, empty tracker
- add_member / remove_member / update_member_role business rules
- rename() and idempotent delete()
- pull_membership_changes(): disjoint buckets, pull-once, one step per pull
- Event buffer drain and restore
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.membership import Membership
from src.domain.entities.organisation import Organisation
from src.domain.enums.organisation_role import OrganisationRole
from src.domain.errors import (
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


def _persisted(owner_id=None, extra_members=()):
    """Rehydrate an organisation as if loaded from storage."""
    owner_id = owner_id or uuid4()
    organisation_id = uuid4()
    created = datetime.now(UTC) - timedelta(days=1)
    memberships = [
        Membership(
            id=uuid4(),
            user_id=owner_id,
            organisation_id=organisation_id,
            role=OrganisationRole.ORG_ADMIN,
            created_at=created,
            updated_at=created,
        )
    ]
    for user_id, role in extra_members:
        memberships.append(
            Membership(
                id=uuid4(),
                user_id=user_id,
                organisation_id=organisation_id,
                role=role,
                created_at=created,
                updated_at=created,
            )
        )
    return Organisation.from_persistence(
        id=organisation_id,
        name="Acme Labs",
        slug="acme-labs",
        owner_id=owner_id,
        created_at=created,
        updated_at=created,
        memberships=memberships,
    )


@pytest.mark.unit
class TestOrganisationCreate:
    """Test Organisation.create()."""

    def test_owner_becomes_first_admin(self):
        # Arrange
        owner_id = uuid4()

        # Act
        organisation = Organisation.create(
            name="Acme Labs", slug="acme-labs", owner_id=owner_id
        )

        # Assert
        assert len(organisation.memberships) == 1
        owner = organisation.memberships[0]
        assert owner.user_id == owner_id
        assert owner.role == OrganisationRole.ORG_ADMIN
        assert owner.organisation_id == organisation.id
        assert organisation.owner_membership is owner
        assert organisation.is_owner(owner_id)
        assert organisation.is_admin(owner_id)
        assert organisation.is_deleted is False

    def test_records_created_then_member_added(self):
        # Arrange
        owner_id = uuid4()
        organisation = Organisation.create(
            name="Acme Labs", slug="acme-labs", owner_id=owner_id
        )

        # Act
        events = organisation.pull_events()

        # Assert
        assert [type(e) for e in events] == [OrganisationCreated, MemberAdded]
        assert events[0].organisation_id == organisation.id
        assert events[0].slug == "acme-labs"
        assert events[1].user_id == owner_id
        assert events[1].role == OrganisationRole.ORG_ADMIN

    def test_owner_membership_tracked_as_created(self):
        organisation = Organisation.create(
            name="Acme Labs", slug="acme-labs", owner_id=uuid4()
        )

        changes = organisation.pull_membership_changes()

        assert changes.created == organisation.memberships
        assert changes.updated == ()
        assert changes.deleted == ()


@pytest.mark.unit
class TestOrganisationFromPersistence:
    """Test rehydration."""

    def test_no_events_and_empty_tracker(self):
        organisation = _persisted(extra_members=[(uuid4(), OrganisationRole.ORG_MEMBER)])

        assert organisation.pull_events() == []
        assert organisation.pull_membership_changes().is_empty
        assert len(organisation.memberships) == 2

    def test_memberships_exposed_as_tuple(self):
        organisation = _persisted()

        assert isinstance(organisation.memberships, tuple)


@pytest.mark.unit
class TestAddMember:
    """Test add_member business rules."""

    def test_adds_member_with_default_role(self):
        # Arrange
        organisation = _persisted()
        user_id = uuid4()
        before = organisation.updated_at

        # Act
        result = organisation.add_member(user_id)

        # Assert
        assert isinstance(result, Success)
        assert result.value.role == OrganisationRole.ORG_MEMBER
        assert organisation.has_member(user_id)
        assert organisation.updated_at > before

        events = organisation.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], MemberAdded)
        assert events[0].membership_id == result.value.id

        changes = organisation.pull_membership_changes()
        assert changes.created == (result.value,)

    def test_duplicate_member_fails(self):
        # Arrange
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])

        # Act
        result = organisation.add_member(user_id, OrganisationRole.ORG_ADMIN)

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, DuplicateMembershipError)
        assert result.error.code == ErrorCode.MEMBERSHIP_ALREADY_EXISTS
        assert organisation.pull_events() == []
        assert organisation.pull_membership_changes().is_empty

    def test_second_add_of_same_user_on_same_instance_fails(self):
        organisation = _persisted()
        user_id = uuid4()

        first = organisation.add_member(user_id)
        second = organisation.add_member(user_id)

        assert isinstance(first, Success)
        assert isinstance(second, Failure)
        assert isinstance(second.error, DuplicateMembershipError)
        assert [m.user_id for m in organisation.memberships].count(user_id) == 1
        assert organisation.pull_membership_changes().created == (first.value,)
        assert [type(e) for e in organisation.pull_events()] == [MemberAdded]

    def test_owner_cannot_be_added_twice(self):
        organisation = _persisted()

        result = organisation.add_member(organisation.owner_id)

        assert isinstance(result, Failure)

    def test_removed_member_can_rejoin(self):
        # Arrange
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])
        membership = organisation.get_membership_by_user_id(user_id)
        organisation.remove_member(membership.id)

        # Act
        result = organisation.add_member(user_id)

        # Assert
        assert isinstance(result, Success)
        assert result.value.id != membership.id


@pytest.mark.unit
class TestRemoveMember:
    """Test remove_member business rules."""

    def test_removes_member_and_records_event(self):
        # Arrange
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])
        membership = organisation.get_membership_by_user_id(user_id)

        # Act
        result = organisation.remove_member(membership.id)

        # Assert
        assert isinstance(result, Success)
        assert not organisation.has_member(user_id)
        assert membership.is_deleted

        events = organisation.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], MemberRemoved)
        assert events[0].deleted_at == membership.deleted_at

        changes = organisation.pull_membership_changes()
        assert [m.id for m in changes.deleted] == [membership.id]
        assert changes.created == ()

    def test_unknown_membership_fails(self):
        organisation = _persisted()

        result = organisation.remove_member(uuid4())

        assert isinstance(result, Failure)
        assert isinstance(result.error, MembershipNotFoundError)

    def test_owner_cannot_be_removed(self):
        # Arrange
        organisation = _persisted()
        owner_membership = organisation.owner_membership

        # Act
        result = organisation.remove_member(owner_membership.id)

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, OwnerRemovalError)
        assert result.error.code == ErrorCode.OWNER_REMOVAL_FORBIDDEN
        assert organisation.owner_membership is owner_membership
        assert organisation.pull_events() == []

    def test_not_found_is_checked_before_owner(self):
        organisation = _persisted()

        result = organisation.remove_member(uuid4())

        assert isinstance(result.error, MembershipNotFoundError)

    def test_removing_twice_fails_second_time(self):
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])
        membership_id = organisation.get_membership_by_user_id(user_id).id

        organisation.remove_member(membership_id)
        result = organisation.remove_member(membership_id)

        assert isinstance(result.error, MembershipNotFoundError)

    def test_add_then_remove_in_same_cycle_leaves_no_change(self):
        # Arrange
        organisation = _persisted()
        added = organisation.add_member(uuid4()).value

        # Act
        organisation.remove_member(added.id)

        # Assert
        assert organisation.pull_membership_changes().is_empty


@pytest.mark.unit
class TestUpdateMemberRole:
    """Test update_member_role business rules."""

    def test_changes_role_and_records_previous(self):
        # Arrange
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])
        membership = organisation.get_membership_by_user_id(user_id)

        # Act
        result = organisation.update_member_role(
            membership.id, OrganisationRole.ORG_ADMIN
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.role == OrganisationRole.ORG_ADMIN
        assert organisation.is_admin(user_id)

        events = organisation.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], MemberRoleChanged)
        assert events[0].previous_role == OrganisationRole.ORG_MEMBER
        assert events[0].new_role == OrganisationRole.ORG_ADMIN

        changes = organisation.pull_membership_changes()
        assert changes.updated == (membership,)

    def test_same_role_is_noop(self):
        # Arrange
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])
        membership = organisation.get_membership_by_user_id(user_id)
        before = (organisation.updated_at, membership.updated_at)

        # Act
        result = organisation.update_member_role(
            membership.id, OrganisationRole.ORG_MEMBER
        )

        # Assert
        assert isinstance(result, Success)
        assert organisation.pull_events() == []
        assert organisation.pull_membership_changes().is_empty
        assert (organisation.updated_at, membership.updated_at) == before

    def test_unknown_membership_fails(self):
        organisation = _persisted()

        result = organisation.update_member_role(uuid4(), OrganisationRole.ORG_ADMIN)

        assert isinstance(result.error, MembershipNotFoundError)

    def test_role_change_on_new_member_stays_in_created_bucket(self):
        organisation = _persisted()
        added = organisation.add_member(uuid4()).value

        organisation.update_member_role(added.id, OrganisationRole.ORG_ADMIN)
        changes = organisation.pull_membership_changes()

        assert changes.created == (added,)
        assert changes.updated == ()
        assert added.role == OrganisationRole.ORG_ADMIN

    def test_role_change_then_removal_only_deletes(self):
        user_id = uuid4()
        organisation = _persisted(extra_members=[(user_id, OrganisationRole.ORG_MEMBER)])
        membership = organisation.get_membership_by_user_id(user_id)

        organisation.update_member_role(membership.id, OrganisationRole.ORG_ADMIN)
        organisation.remove_member(membership.id)
        changes = organisation.pull_membership_changes()

        assert changes.updated == ()
        assert [m.id for m in changes.deleted] == [membership.id]


@pytest.mark.unit
class TestRenameAndDelete:
    """Test rename() and delete()."""

    def test_rename_changes_name_and_slug(self):
        organisation = _persisted()
        before = organisation.updated_at

        organisation.rename("Acme Industries", "acme-industries")

        assert organisation.name == "Acme Industries"
        assert organisation.slug == "acme-industries"
        assert organisation.updated_at > before
        assert organisation.pull_events() == []

    def test_rename_without_slug_keeps_slug(self):
        organisation = _persisted()

        organisation.rename("Acme Industries")

        assert organisation.slug == "acme-labs"

    def test_delete_is_idempotent(self):
        # Arrange
        organisation = _persisted()

        # Act
        organisation.delete()
        first_deleted_at = organisation.deleted_at
        organisation.delete()

        # Assert
        assert organisation.is_deleted
        assert organisation.deleted_at == first_deleted_at
        events = organisation.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], OrganisationDeleted)
        assert events[0].slug == "acme-labs"
        assert events[0].deleted_at == first_deleted_at


@pytest.mark.unit
class TestChangeTrackingAndEvents:
    """Test pull-once tracker and event buffer."""

    def test_second_pull_returns_empty_changes(self):
        organisation = _persisted()
        organisation.add_member(uuid4())

        first = organisation.pull_membership_changes()
        second = organisation.pull_membership_changes()

        assert len(first.created) == 1
        assert second.is_empty

    def test_buckets_are_disjoint(self):
        # Arrange
        member_a, member_b = uuid4(), uuid4()
        organisation = _persisted(
            extra_members=[
                (member_a, OrganisationRole.ORG_MEMBER),
                (member_b, OrganisationRole.ORG_MEMBER),
            ]
        )
        a = organisation.get_membership_by_user_id(member_a)
        b = organisation.get_membership_by_user_id(member_b)

        # Act
        organisation.update_member_role(a.id, OrganisationRole.ORG_ADMIN)
        organisation.remove_member(b.id)
        added = organisation.add_member(uuid4()).value
        changes = organisation.pull_membership_changes()

        # Assert
        created = {m.id for m in changes.created}
        updated = {m.id for m in changes.updated}
        deleted = {m.id for m in changes.deleted}
        assert created == {added.id}
        assert updated == {a.id}
        assert deleted == {b.id}

    def test_each_pull_holds_only_its_step(self):
        # Arrange
        organisation = _persisted()
        owner_id = organisation.owner_id

        # Act / Assert: add
        membership = organisation.add_member(uuid4()).value
        after_add = organisation.pull_membership_changes()
        assert after_add.created == (membership,)
        assert after_add.updated == ()
        assert after_add.deleted == ()

        # Act / Assert: role change
        organisation.update_member_role(membership.id, OrganisationRole.ORG_ADMIN)
        after_update = organisation.pull_membership_changes()
        assert after_update.created == ()
        assert [m.id for m in after_update.updated] == [membership.id]
        assert after_update.updated[0].role == OrganisationRole.ORG_ADMIN
        assert after_update.deleted == ()

        # Act / Assert: removal
        organisation.remove_member(membership.id)
        after_remove = organisation.pull_membership_changes()
        assert after_remove.created == ()
        assert after_remove.updated == ()
        assert [m.id for m in after_remove.deleted] == [membership.id]
        assert after_remove.deleted[0].deleted_at is not None

        assert [m.user_id for m in organisation.memberships] == [owner_id]
        assert organisation.pull_membership_changes().is_empty

    def test_pull_events_returns_copy_and_clears(self):
        organisation = Organisation.create(
            name="Acme Labs", slug="acme-labs", owner_id=uuid4()
        )

        events = organisation.pull_events()
        events.clear()

        assert organisation.pull_events() == []
        assert organisation.has_pending_events is False

    def test_restore_events_puts_events_back_in_front(self):
        # Arrange
        organisation = _persisted()
        organisation.add_member(uuid4())
        drained = organisation.pull_events()
        organisation.add_member(uuid4())

        # Act
        organisation.restore_events(drained)
        events = organisation.pull_events()

        # Assert
        assert len(events) == 2
        assert events[0] is drained[0]
