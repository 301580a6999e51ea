"""Memberships resource handlers.

Handler functions for membership endpoints, nested under organisations,
plus the caller's own memberships across organisations.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    list_organisation_memberships - Members of one organisation
    get_membership                - One member of an organisation
    add_membership                - Add a user to an organisation
    update_membership             - Change a member's role
    remove_membership             - Remove a member
    list_my_memberships           - Caller's memberships, newest first
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands.handlers import (
    AddMemberHandler,
    RemoveMemberHandler,
    UpdateMemberRoleHandler,
)
from src.application.commands.membership_commands import (
    AddMember,
    RemoveMember,
    UpdateMemberRole,
)
from src.application.queries import MembershipQueryService
from src.core.container import (
    PrincipalId,
    get_add_member_handler,
    get_membership_query_service,
    get_remove_member_handler,
    get_update_member_role_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.organisation_schemas import (
    MembershipCreateRequest,
    MembershipListResponse,
    MembershipResponse,
    MembershipUpdateRequest,
)

SlugPath = Annotated[str, Path(description="Organisation slug", max_length=100)]
MembershipIdPath = Annotated[UUID, Path(description="Membership UUID")]
Limit = Annotated[int, Query(ge=1, le=100, description="Page size")]
Offset = Annotated[int, Query(ge=0, description="Memberships to skip")]


async def list_organisation_memberships(
    request: Request,
    slug: SlugPath,
    limit: Limit = 20,
    offset: Offset = 0,
    service: MembershipQueryService = Depends(get_membership_query_service),
) -> MembershipListResponse | JSONResponse:
    """List members of an organisation, oldest first.

    GET /api/v1/organisations/{slug}/memberships → 200 OK
    """
    result = await service.list_organisation_memberships_by_slug(
        slug, limit=limit, offset=offset
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return MembershipListResponse.from_page(result.value)


async def get_membership(
    request: Request,
    slug: SlugPath,
    membership_id: MembershipIdPath,
    service: MembershipQueryService = Depends(get_membership_query_service),
) -> MembershipResponse | JSONResponse:
    """Get one membership of an organisation.

    GET /api/v1/organisations/{slug}/memberships/{membership_id} → 200 OK

    A membership of a different organisation is a 404, as is one the caller
    cannot read.
    """
    result = await service.get_organisation_membership(slug, membership_id)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return MembershipResponse.from_dto(result.value)


async def add_membership(
    request: Request,
    slug: SlugPath,
    data: MembershipCreateRequest,
    handler: AddMemberHandler = Depends(get_add_member_handler),
) -> MembershipResponse | JSONResponse:
    """Add a user to an organisation.

    POST /api/v1/organisations/{slug}/memberships → 201 Created

    Returns:
        MembershipResponse for the new member.
        JSONResponse with RFC 7807 error on failure (403/404/409).
    """
    command = AddMember(organisation_slug=slug, user_id=data.user_id, role=data.role)
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return MembershipResponse.from_dto(result.value)


async def update_membership(
    request: Request,
    slug: SlugPath,
    membership_id: MembershipIdPath,
    data: MembershipUpdateRequest,
    handler: UpdateMemberRoleHandler = Depends(get_update_member_role_handler),
) -> MembershipResponse | JSONResponse:
    """Change a member's role.

    PATCH /api/v1/organisations/{slug}/memberships/{membership_id} → 200 OK
    """
    command = UpdateMemberRole(
        organisation_slug=slug, membership_id=membership_id, role=data.role
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return MembershipResponse.from_dto(result.value)


async def remove_membership(
    request: Request,
    slug: SlugPath,
    membership_id: MembershipIdPath,
    handler: RemoveMemberHandler = Depends(get_remove_member_handler),
) -> Response:
    """Remove a member.

    DELETE /api/v1/organisations/{slug}/memberships/{membership_id} → 204 No Content

    The owner's membership cannot be removed (400).
    """
    command = RemoveMember(organisation_slug=slug, membership_id=membership_id)
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def list_my_memberships(
    request: Request,
    principal_id: PrincipalId,
    limit: Limit = 20,
    offset: Offset = 0,
    service: MembershipQueryService = Depends(get_membership_query_service),
) -> MembershipListResponse | JSONResponse:
    """List the caller's memberships across organisations, newest first.

    GET /api/v1/users/me/memberships → 200 OK
    """
    result = await service.list_user_memberships(
        principal_id, limit=limit, offset=offset
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return MembershipListResponse.from_page(result.value)
