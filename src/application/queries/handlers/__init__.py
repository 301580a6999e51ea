"""Query handlers."""

from src.application.queries.handlers.get_organisation_handler import (
    GetOrganisationBySlugHandler,
)
from src.application.queries.handlers.list_organisations_handler import (
    ListOrganisationsHandler,
)

__all__ = [
    "GetOrganisationBySlugHandler",
    "ListOrganisationsHandler",
]
