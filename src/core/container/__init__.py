"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_organisation_repository, ...

The container is organized into modules by concern:
- infrastructure: Core services (database, session, logging)
- events: Event bus and subscriptions
- principal: Calling principal from the gateway header
- repositories: Policy-scoped repository factories
- handlers: Command/query handler factories and the unit of work
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
)

# Event bus
from src.core.container.events import get_event_bus

# Principal
from src.core.container.principal import PrincipalId, get_principal_id

# Repositories
from src.core.container.repositories import (
    get_membership_repository,
    get_organisation_repository,
    get_unrestricted_organisation_repository,
)

# Handlers
from src.core.container.handlers import (
    get_add_member_handler,
    get_create_organisation_handler,
    get_delete_organisation_handler,
    get_get_organisation_by_slug_handler,
    get_list_organisations_handler,
    get_membership_query_service,
    get_remove_member_handler,
    get_rename_organisation_handler,
    get_unit_of_work,
    get_update_member_role_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_logger",
    # Events
    "get_event_bus",
    # Principal
    "PrincipalId",
    "get_principal_id",
    # Repositories
    "get_membership_repository",
    "get_organisation_repository",
    "get_unrestricted_organisation_repository",
    # Handlers
    "get_unit_of_work",
    "get_create_organisation_handler",
    "get_rename_organisation_handler",
    "get_delete_organisation_handler",
    "get_add_member_handler",
    "get_remove_member_handler",
    "get_update_member_role_handler",
    "get_get_organisation_by_slug_handler",
    "get_list_organisations_handler",
    "get_membership_query_service",
]
