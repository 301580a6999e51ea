"""CQRS Registry - Single Source of Truth for Commands and Queries.

This registry catalogs all commands and queries with their metadata.
Used for:
- Validation tests (verify no drift between commands, handlers and container)
- Gap detection (missing handlers, result DTOs, factories)

Adding new commands/queries:
1. Define command/query dataclass in *_commands.py / *_queries.py
2. Create handler class in handlers/ directory
3. Add entry to COMMAND_REGISTRY or QUERY_REGISTRY below
4. Add the container factory ``get_<name>_handler``
5. Run tests - they'll tell you what's missing
"""

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
from src.application.cqrs.metadata import (
    CommandMetadata,
    CQRSCategory,
    QueryMetadata,
)
from src.application.dtos.organisation_dtos import (
    MembershipResult,
    OrganisationResult,
)
from src.application.queries.handlers.get_organisation_handler import (
    GetOrganisationBySlugHandler,
)
from src.application.queries.handlers.list_organisations_handler import (
    ListOrganisationsHandler,
)
from src.application.queries.organisation_queries import (
    GetOrganisationBySlug,
    ListOrganisations,
)

# ═══════════════════════════════════════════════════════════════════════════
# COMMAND REGISTRY (6 commands)
# ═══════════════════════════════════════════════════════════════════════════

COMMAND_REGISTRY: list[CommandMetadata] = [
    # Organisation commands
    CommandMetadata(
        command_class=CreateOrganisation,
        handler_class=CreateOrganisationHandler,
        category=CQRSCategory.ORGANISATION,
        has_result_dto=True,
        result_dto_class=OrganisationResult,
        bypasses_access_policy=True,  # No membership exists before creation
        description="Create organisation with the owner as first admin",
    ),
    CommandMetadata(
        command_class=RenameOrganisation,
        handler_class=RenameOrganisationHandler,
        category=CQRSCategory.ORGANISATION,
        has_result_dto=True,
        result_dto_class=OrganisationResult,
        emits_events=False,  # Rename raises no domain event
        description="Change organisation name and optionally slug",
    ),
    CommandMetadata(
        command_class=DeleteOrganisation,
        handler_class=DeleteOrganisationHandler,
        category=CQRSCategory.ORGANISATION,
        description="Soft delete an organisation",
    ),
    # Membership commands
    CommandMetadata(
        command_class=AddMember,
        handler_class=AddMemberHandler,
        category=CQRSCategory.MEMBERSHIP,
        has_result_dto=True,
        result_dto_class=MembershipResult,
        description="Add a user to an organisation",
    ),
    CommandMetadata(
        command_class=RemoveMember,
        handler_class=RemoveMemberHandler,
        category=CQRSCategory.MEMBERSHIP,
        description="Remove a membership (owner cannot be removed)",
    ),
    CommandMetadata(
        command_class=UpdateMemberRole,
        handler_class=UpdateMemberRoleHandler,
        category=CQRSCategory.MEMBERSHIP,
        has_result_dto=True,
        result_dto_class=MembershipResult,
        description="Change a member's role",
    ),
]


# ═══════════════════════════════════════════════════════════════════════════
# QUERY REGISTRY (2 queries)
# ═══════════════════════════════════════════════════════════════════════════

QUERY_REGISTRY: list[QueryMetadata] = [
    QueryMetadata(
        query_class=GetOrganisationBySlug,
        handler_class=GetOrganisationBySlugHandler,
        category=CQRSCategory.ORGANISATION,
        description="Get one organisation with its members",
    ),
    QueryMetadata(
        query_class=ListOrganisations,
        handler_class=ListOrganisationsHandler,
        category=CQRSCategory.ORGANISATION,
        is_paginated=True,
        description="List organisations the principal belongs to",
    ),
]
