"""Validators package exports."""

from src.domain.validators.functions import (
    SLUG_MAX_LENGTH,
    SLUG_PATTERN,
    parse_organisation_name,
    parse_slug,
    slugify,
    validate_organisation_name,
    validate_slug,
)

__all__ = [
    "SLUG_MAX_LENGTH",
    "SLUG_PATTERN",
    "parse_organisation_name",
    "parse_slug",
    "slugify",
    "validate_organisation_name",
    "validate_slug",
]
