"""Organisation aggregate errors.

Business rule violations produced by the Organisation aggregate and by the
handlers that load it. They are returned inside ``Failure`` (never raised)
and translated by command handlers into application errors:

    DuplicateMembershipError  -> CONFLICT (409)
    SlugTakenError            -> CONFLICT (409)
    MembershipNotFoundError   -> NOT_FOUND (404)
    OrganisationNotFoundError -> NOT_FOUND (404)
    OwnerRemovalError         -> COMMAND_VALIDATION_FAILED (400)

Usage:
    from src.domain.errors import OwnerRemovalError

    if membership.user_id == self.owner_id:
        return Failure(error=OwnerRemovalError.for_membership(membership.id))
"""

from dataclasses import dataclass
from uuid import UUID

from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError, NotFoundError


@dataclass(frozen=True, slots=True, kw_only=True)
class DuplicateMembershipError(ConflictError):
    """User already holds an active membership in the organisation."""

    organisation_id: UUID
    user_id: UUID

    @classmethod
    def for_user(cls, organisation_id: UUID, user_id: UUID) -> "DuplicateMembershipError":
        return cls(
            code=ErrorCode.MEMBERSHIP_ALREADY_EXISTS,
            message=f"User {user_id} is already a member of this organisation",
            resource_type="Membership",
            conflicting_field="user_id",
            organisation_id=organisation_id,
            user_id=user_id,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class MembershipNotFoundError(NotFoundError):
    """Membership id is not in the organisation's active memberships."""

    @classmethod
    def for_id(cls, membership_id: UUID) -> "MembershipNotFoundError":
        return cls(
            code=ErrorCode.MEMBERSHIP_NOT_FOUND,
            message=f"Membership {membership_id} not found",
            resource_type="Membership",
            resource_id=str(membership_id),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class OwnerRemovalError(DomainError):
    """Attempt to remove the membership that belongs to the owner."""

    membership_id: UUID

    @classmethod
    def for_membership(cls, membership_id: UUID) -> "OwnerRemovalError":
        return cls(
            code=ErrorCode.OWNER_REMOVAL_FORBIDDEN,
            message="Cannot remove the organisation owner",
            membership_id=membership_id,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class OrganisationNotFoundError(NotFoundError):
    """No readable organisation holds the slug."""

    @classmethod
    def for_slug(cls, slug: str) -> "OrganisationNotFoundError":
        return cls(
            code=ErrorCode.ORGANISATION_NOT_FOUND,
            message=f"Organisation {slug!r} not found",
            resource_type="Organisation",
            resource_id=slug,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class SlugTakenError(ConflictError):
    """Slug already belongs to another organisation, deleted ones included."""

    slug: str

    @classmethod
    def for_slug(cls, slug: str) -> "SlugTakenError":
        return cls(
            code=ErrorCode.SLUG_ALREADY_EXISTS,
            message=f"Organisation with slug {slug!r} already exists",
            resource_type="Organisation",
            conflicting_field="slug",
            slug=slug,
        )


OrganisationError = (
    DuplicateMembershipError
    | MembershipNotFoundError
    | OwnerRemovalError
    | OrganisationNotFoundError
    | SlugTakenError
)
