"""Organisation queries (CQRS read operations).

Queries represent requests for organisation data. They are immutable
dataclasses with question-like names. Queries NEVER change state.

Pattern:
- Queries are data containers (no logic)
- Handlers fetch and return data
- Queries do NOT emit domain events

Visibility is decided by the access policy on the handler's repository:
a principal only ever sees organisations it is an active member of.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class GetOrganisationBySlug:
    """Get a single organisation, with its memberships, by slug.

    Example:
        >>> result = await handler.handle(GetOrganisationBySlug(slug="acme"))
    """

    slug: str


@dataclass(frozen=True, kw_only=True)
class ListOrganisations:
    """List readable organisations, oldest first.

    Attributes:
        limit: Page size (1-100).
        offset: Organisations to skip.
    """

    limit: int = 20
    offset: int = 0
