"""Generic error shapes shared by every aggregate.

``from_domain_error`` in the application layer maps these shapes onto
HTTP-facing codes: NotFoundError becomes 404, ConflictError 409 and the
rest a rejected command. Organisation errors subclass them.

Example:
    return Failure(error=ValidationError(
        code=ErrorCode.INVALID_SLUG,
        message="Slug must be lowercase kebab-case",
        field="slug",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input rejected by a validator; ``field`` names the input."""

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Lookup by id or slug found nothing visible to the caller."""

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Write would break a uniqueness rule (slug, one membership per user)."""

    resource_type: str
    conflicting_field: str | None = None
