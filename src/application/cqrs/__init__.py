"""Catalog of every command and query the application accepts.

To add one: write the dataclass, its handler and its container factory
``get_<snake_name>_handler``, then register it in ``registry.py``. The
compliance tests report whichever piece is missing.
"""

from src.application.cqrs.computed_views import (
    get_all_commands,
    get_all_queries,
    get_command_metadata,
    get_commands_by_category,
    get_commands_bypassing_access_policy,
    get_commands_emitting_events,
    get_queries_by_category,
    get_query_metadata,
    get_statistics,
    validate_registry_consistency,
)
from src.application.cqrs.metadata import (
    CommandMetadata,
    CQRSCategory,
    QueryMetadata,
    get_handler_factory_name,
)
from src.application.cqrs.registry import COMMAND_REGISTRY, QUERY_REGISTRY

__all__ = [
    "COMMAND_REGISTRY",
    "CQRSCategory",
    "CommandMetadata",
    "QUERY_REGISTRY",
    "QueryMetadata",
    "get_all_commands",
    "get_all_queries",
    "get_command_metadata",
    "get_commands_by_category",
    "get_commands_bypassing_access_policy",
    "get_commands_emitting_events",
    "get_handler_factory_name",
    "get_queries_by_category",
    "get_query_metadata",
    "get_statistics",
    "validate_registry_consistency",
]
