"""Result types for railway-oriented programming.

Aggregate methods and command handlers return a Result instead of raising,
so every failure path is visible in the signature and easy to assert on in
tests. The unit of work treats a returned ``Failure`` like a raised
exception: the transaction rolls back and no queued event is published.

Usage:
    def remove_member(self, membership_id: UUID) -> Result[None, DomainError]:
        if membership is None:
            return Failure(error=MembershipNotFoundError(...))
        return Success(value=None)

    match organisation.remove_member(membership_id):
        case Success():
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
Result = Success[T] | Failure[E]
