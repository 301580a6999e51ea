"""Read-only views over COMMAND_REGISTRY and QUERY_REGISTRY."""

import dataclasses
import inspect
from collections import Counter

from src.application.cqrs.metadata import (
    CommandMetadata,
    CQRSCategory,
    QueryMetadata,
)
from src.application.cqrs.registry import COMMAND_REGISTRY, QUERY_REGISTRY


def get_all_commands() -> list[type]:
    return [meta.command_class for meta in COMMAND_REGISTRY]


def get_all_queries() -> list[type]:
    return [meta.query_class for meta in QUERY_REGISTRY]


def get_commands_by_category(category: CQRSCategory) -> list[CommandMetadata]:
    return [meta for meta in COMMAND_REGISTRY if meta.category == category]


def get_queries_by_category(category: CQRSCategory) -> list[QueryMetadata]:
    return [meta for meta in QUERY_REGISTRY if meta.category == category]


def get_command_metadata(command_class: type) -> CommandMetadata | None:
    return next(
        (meta for meta in COMMAND_REGISTRY if meta.command_class is command_class),
        None,
    )


def get_query_metadata(query_class: type) -> QueryMetadata | None:
    return next(
        (meta for meta in QUERY_REGISTRY if meta.query_class is query_class), None
    )


def get_commands_emitting_events() -> list[CommandMetadata]:
    return [meta for meta in COMMAND_REGISTRY if meta.emits_events]


def get_commands_bypassing_access_policy() -> list[CommandMetadata]:
    return [meta for meta in COMMAND_REGISTRY if meta.bypasses_access_policy]


def get_statistics() -> dict[str, int | dict[str, int]]:
    return {
        "total_commands": len(COMMAND_REGISTRY),
        "total_queries": len(QUERY_REGISTRY),
        "commands_by_category": dict(
            Counter(meta.category.value for meta in COMMAND_REGISTRY)
        ),
        "queries_by_category": dict(
            Counter(meta.category.value for meta in QUERY_REGISTRY)
        ),
        "commands_emitting_events": len(get_commands_emitting_events()),
        "commands_bypassing_access_policy": len(
            get_commands_bypassing_access_policy()
        ),
        "paginated_queries": sum(1 for meta in QUERY_REGISTRY if meta.is_paginated),
    }


def _is_frozen_dataclass(cls: type) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    return params is not None and params.frozen


def validate_registry_consistency() -> list[str]:
    """Check the registry against the classes it names.

    Returns:
        One message per problem; empty when the registry is consistent.
    """
    errors: list[str] = []

    command_classes = get_all_commands()
    if len(command_classes) != len(set(command_classes)):
        errors.append("Duplicate command classes in COMMAND_REGISTRY")
    query_classes = get_all_queries()
    if len(query_classes) != len(set(query_classes)):
        errors.append("Duplicate query classes in QUERY_REGISTRY")

    for cmd in COMMAND_REGISTRY:
        name = cmd.command_class.__name__
        if not _is_frozen_dataclass(cmd.command_class):
            errors.append(f"Command {name} is not a frozen dataclass")
        if not inspect.iscoroutinefunction(getattr(cmd.handler_class, "handle", None)):
            errors.append(f"{cmd.handler_class.__name__}.handle is not async")
        takes_uow = "uow" in inspect.signature(cmd.handler_class).parameters
        if cmd.requires_transaction != takes_uow:
            errors.append(
                f"Command {name}: requires_transaction={cmd.requires_transaction} "
                f"but handler {'takes' if takes_uow else 'lacks'} a uow"
            )

    for qry in QUERY_REGISTRY:
        name = qry.query_class.__name__
        if not _is_frozen_dataclass(qry.query_class):
            errors.append(f"Query {name} is not a frozen dataclass")
        if not inspect.iscoroutinefunction(getattr(qry.handler_class, "handle", None)):
            errors.append(f"{qry.handler_class.__name__}.handle is not async")
        if qry.is_paginated:
            fields = {f.name for f in dataclasses.fields(qry.query_class)}
            if not {"limit", "offset"} <= fields:
                errors.append(f"Paginated query {name} lacks limit/offset fields")

    return errors
