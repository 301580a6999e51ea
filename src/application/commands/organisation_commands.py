"""Organisation commands (CQRS write operations).

Commands represent user intent to change organisation state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)

Who may run a command is decided by the access policy bound to the
handler's repository, not by a field on the command.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class CreateOrganisation:
    """Create an organisation owned by ``owner_id``.

    The owner becomes the first ORG_ADMIN member. When ``slug`` is omitted
    one is derived from the name, with a random suffix on collision.

    Attributes:
        name: Display name (2-100 characters).
        owner_id: User creating the organisation (the principal).
        slug: Optional explicit slug; a taken slug is a conflict.

    Example:
        >>> command = CreateOrganisation(name="Acme Labs", owner_id=principal_id)
        >>> result = await handler.handle(command)
    """

    name: str
    owner_id: UUID
    slug: str | None = None


@dataclass(frozen=True, kw_only=True)
class RenameOrganisation:
    """Rename an organisation, optionally moving it to a new slug.

    Attributes:
        organisation_slug: Current slug of the organisation.
        name: New display name.
        slug: Optional new slug.
    """

    organisation_slug: str
    name: str
    slug: str | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteOrganisation:
    """Soft-delete an organisation. Its slug stays reserved."""

    organisation_slug: str
