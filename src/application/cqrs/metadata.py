"""Registry entry types for commands and queries.

Entries are frozen; the registry is built once at import time and only
read afterwards (by the compliance tests and the container factories).
"""

import re
from dataclasses import dataclass
from enum import Enum


class CQRSCategory(str, Enum):
    """Aggregate a command or query works on."""

    ORGANISATION = "organisation"
    MEMBERSHIP = "membership"


@dataclass(frozen=True, kw_only=True)
class CommandMetadata:
    """One registered command.

    Attributes:
        command_class: Frozen dataclass describing the intent.
        handler_class: Class whose ``handle`` executes it.
        category: Aggregate the command changes.
        has_result_dto: Handler returns a DTO inside ``Success``.
        result_dto_class: That DTO, required iff ``has_result_dto``.
        emits_events: Aggregate records domain events for this command.
        requires_transaction: Handler takes a unit of work (``uow``).
        bypasses_access_policy: Handler's repository is unrestricted. Only
            creation qualifies, as no membership exists to authorise it yet.
        description: One line for docs.
    """

    command_class: type
    handler_class: type
    category: CQRSCategory
    has_result_dto: bool = False
    result_dto_class: type | None = None
    emits_events: bool = True
    requires_transaction: bool = True
    bypasses_access_policy: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if self.has_result_dto != (self.result_dto_class is not None):
            raise ValueError(
                f"Command {self.command_class.__name__}: has_result_dto="
                f"{self.has_result_dto} disagrees with result_dto_class="
                f"{self.result_dto_class!r}"
            )


@dataclass(frozen=True, kw_only=True)
class QueryMetadata:
    """One registered query.

    ``is_paginated`` queries carry ``limit`` and ``offset`` fields and
    return a page of results.
    """

    query_class: type
    handler_class: type
    category: CQRSCategory
    is_paginated: bool = False
    description: str = ""


def get_handler_factory_name(metadata: CommandMetadata | QueryMetadata) -> str:
    """Name of the container factory for an entry's handler.

    Example:
        >>> get_handler_factory_name(create_organisation_metadata)
        'get_create_organisation_handler'
    """
    if isinstance(metadata, CommandMetadata):
        class_name = metadata.command_class.__name__
    else:
        class_name = metadata.query_class.__name__
    snake_case = re.sub(r"(?<!^)(?=[A-Z])", "_", class_name).lower()
    return f"get_{snake_case}_handler"
