"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetOrganisationBySlug, ListOrganisations).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state.
"""

from src.application.queries.membership_query_service import MembershipQueryService
from src.application.queries.organisation_queries import (
    GetOrganisationBySlug,
    ListOrganisations,
)

__all__ = [
    "GetOrganisationBySlug",
    "ListOrganisations",
    "MembershipQueryService",
]
