"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (CreateOrganisation, AddMember).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.membership_commands import (
    AddMember,
    RemoveMember,
    UpdateMemberRole,
)
from src.application.commands.organisation_commands import (
    CreateOrganisation,
    DeleteOrganisation,
    RenameOrganisation,
)

__all__ = [
    # Organisation commands
    "CreateOrganisation",
    "DeleteOrganisation",
    "RenameOrganisation",
    # Membership commands
    "AddMember",
    "RemoveMember",
    "UpdateMemberRole",
]
