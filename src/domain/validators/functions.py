"""Centralized validation functions (DRY principle).

All validation logic defined once, reused everywhere via Annotated types
(see src/domain/types.py) and by command handlers.
Validators are pure functions that raise ValueError on validation failure.
The parse_* variants wrap them for handlers that work with Result types.
"""

import re

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success

ORGANISATION_NAME_MIN_LENGTH = 2
ORGANISATION_NAME_MAX_LENGTH = 100
SLUG_MAX_LENGTH = 100

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def validate_organisation_name(v: str) -> str:
    """Validate and normalise an organisation name.

    Args:
        v: Raw name.

    Returns:
        Name with surrounding whitespace removed.

    Raises:
        ValueError: If the trimmed name is not 2-100 characters.

    Example:
        >>> validate_organisation_name("  Acme  ")
        'Acme'
    """
    name = v.strip()
    if not ORGANISATION_NAME_MIN_LENGTH <= len(name) <= ORGANISATION_NAME_MAX_LENGTH:
        raise ValueError(
            f"Organisation name must be {ORGANISATION_NAME_MIN_LENGTH}-"
            f"{ORGANISATION_NAME_MAX_LENGTH} characters"
        )
    return name


def validate_slug(v: str) -> str:
    """Validate slug format (lowercase kebab-case).

    Args:
        v: Slug to validate.

    Returns:
        Slug unchanged.

    Raises:
        ValueError: If slug is too long or not lowercase kebab-case.

    Example:
        >>> validate_slug("acme-labs")
        'acme-labs'
        >>> validate_slug("Acme Labs")
        ValueError: Slug must contain only lowercase letters, digits and single hyphens
    """
    if len(v) > SLUG_MAX_LENGTH:
        raise ValueError(f"Slug must be at most {SLUG_MAX_LENGTH} characters")
    if not SLUG_PATTERN.match(v):
        raise ValueError(
            "Slug must contain only lowercase letters, digits and single hyphens"
        )
    return v


def slugify(value: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Derive a slug from free text.

    Runs of anything other than ``[a-z0-9]`` collapse into a single hyphen.
    Text with no usable characters falls back to ``org``.

    Example:
        >>> slugify("Acme Labs, Inc.")
        'acme-labs-inc'
    """
    slug = _SLUG_SEPARATORS.sub("-", value.lower()).strip("-")
    slug = slug[:max_length].rstrip("-")
    return slug or "org"


def parse_organisation_name(v: str) -> Result[str, ValidationError]:
    """Result-returning variant of ``validate_organisation_name``."""
    try:
        return Success(value=validate_organisation_name(v))
    except ValueError as e:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_ORGANISATION_NAME,
                message=str(e),
                field="name",
            )
        )


def parse_slug(v: str) -> Result[str, ValidationError]:
    """Result-returning variant of ``validate_slug``."""
    try:
        return Success(value=validate_slug(v))
    except ValueError as e:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_SLUG,
                message=str(e),
                field="slug",
            )
        )
