"""Membership change set value object.

The diff produced by ``Organisation.pull_membership_changes()``: which
memberships must be inserted, updated or deleted to bring the stored rows in
line with the in-memory aggregate. Pulling clears the aggregate's tracker,
so the repository holds the only copy of the diff for that save.

Usage:
    changes = organisation.pull_membership_changes()
    for membership in changes.deleted:
        ...
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.entities.membership import Membership


@dataclass(frozen=True, slots=True, kw_only=True)
class MembershipChanges:
    """Membership diff since the aggregate was loaded or last saved.

    The three buckets are disjoint: a membership added and removed within the
    same cycle never reached storage, so it appears in none of them.

    Attributes:
        created: Memberships to insert.
        updated: Memberships whose role changed.
        deleted: Snapshots of removed memberships (already marked deleted).
    """

    created: tuple["Membership", ...] = ()
    updated: tuple["Membership", ...] = ()
    deleted: tuple["Membership", ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to write."""
        return not (self.created or self.updated or self.deleted)
