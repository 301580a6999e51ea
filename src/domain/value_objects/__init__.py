"""Domain value objects.

Immutable values with no identity.
"""

from src.domain.value_objects.membership_changes import MembershipChanges

__all__ = [
    "MembershipChanges",
]
