"""Annotated types with centralized validation (DRY principle).

Define validation once, use everywhere.
All custom types use Pydantic's Annotated with Field constraints and AfterValidator.

Usage:
    from src.domain.types import OrganisationName, OrganisationSlug

    class CreateOrganisationRequest(BaseModel):
        name: OrganisationName
        slug: OrganisationSlug | None = None
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from src.domain.validators import validate_organisation_name, validate_slug

OrganisationName = Annotated[
    str,
    Field(
        min_length=2,
        max_length=100,
        description="Organisation display name",
        examples=["Acme Labs"],
    ),
    AfterValidator(validate_organisation_name),
]
"""Organisation name, 2-100 characters after trimming."""

OrganisationSlug = Annotated[
    str,
    Field(
        max_length=100,
        description="Unique URL-safe organisation identifier",
        examples=["acme-labs"],
    ),
    AfterValidator(validate_slug),
]
"""Lowercase kebab-case slug.

Examples:
    >>> class RenameRequest(BaseModel):
    ...     slug: OrganisationSlug
    >>> RenameRequest(slug="Acme")  # raises ValidationError
"""
