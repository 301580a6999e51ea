"""Command handlers."""

from src.application.commands.handlers.add_member_handler import AddMemberHandler
from src.application.commands.handlers.create_organisation_handler import (
    CreateOrganisationHandler,
)
from src.application.commands.handlers.delete_organisation_handler import (
    DeleteOrganisationHandler,
)
from src.application.commands.handlers.remove_member_handler import (
    RemoveMemberHandler,
)
from src.application.commands.handlers.rename_organisation_handler import (
    RenameOrganisationHandler,
)
from src.application.commands.handlers.update_member_role_handler import (
    UpdateMemberRoleHandler,
)

__all__ = [
    "AddMemberHandler",
    "CreateOrganisationHandler",
    "DeleteOrganisationHandler",
    "RemoveMemberHandler",
    "RenameOrganisationHandler",
    "UpdateMemberRoleHandler",
]
