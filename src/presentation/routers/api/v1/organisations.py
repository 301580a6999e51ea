"""Organisations resource handlers.

Handler functions for organisation endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    create_organisation - Create organisation (caller becomes owner)
    list_organisations  - List organisations the caller belongs to
    get_organisation    - Get one organisation with its members
    update_organisation - Rename organisation, optionally changing slug
    delete_organisation - Soft delete organisation

Authorization:
    Handlers never check roles. The repositories behind them filter every
    statement by the caller's access policy; a denied write surfaces as
    PolicyRejectedError and the exception handler answers 403.
"""

from typing import Annotated

from fastapi import Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands.handlers import (
    CreateOrganisationHandler,
    DeleteOrganisationHandler,
    RenameOrganisationHandler,
)
from src.application.commands.organisation_commands import (
    CreateOrganisation,
    DeleteOrganisation,
    RenameOrganisation,
)
from src.application.queries.handlers import (
    GetOrganisationBySlugHandler,
    ListOrganisationsHandler,
)
from src.application.queries.organisation_queries import (
    GetOrganisationBySlug,
    ListOrganisations,
)
from src.core.container import (
    PrincipalId,
    get_create_organisation_handler,
    get_delete_organisation_handler,
    get_get_organisation_by_slug_handler,
    get_list_organisations_handler,
    get_rename_organisation_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.organisation_schemas import (
    OrganisationCreateRequest,
    OrganisationListResponse,
    OrganisationResponse,
    OrganisationUpdateRequest,
)

SlugPath = Annotated[str, Path(description="Organisation slug", max_length=100)]


async def create_organisation(
    request: Request,
    principal_id: PrincipalId,
    data: OrganisationCreateRequest,
    handler: CreateOrganisationHandler = Depends(get_create_organisation_handler),
) -> OrganisationResponse | JSONResponse:
    """Create an organisation owned by the caller.

    POST /api/v1/organisations → 201 Created

    Returns:
        OrganisationResponse with the owner as the only member.
        JSONResponse with RFC 7807 error on failure (400/409).
    """
    command = CreateOrganisation(name=data.name, owner_id=principal_id, slug=data.slug)
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return OrganisationResponse.from_dto(result.value)


async def list_organisations(
    request: Request,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 20,
    offset: Annotated[int, Query(ge=0, description="Organisations to skip")] = 0,
    handler: ListOrganisationsHandler = Depends(get_list_organisations_handler),
) -> OrganisationListResponse | JSONResponse:
    """List organisations the caller is a member of.

    GET /api/v1/organisations → 200 OK
    """
    result = await handler.handle(ListOrganisations(limit=limit, offset=offset))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return OrganisationListResponse.from_dto(result.value)


async def get_organisation(
    request: Request,
    slug: SlugPath,
    handler: GetOrganisationBySlugHandler = Depends(
        get_get_organisation_by_slug_handler
    ),
) -> OrganisationResponse | JSONResponse:
    """Get one organisation with its active members.

    GET /api/v1/organisations/{slug} → 200 OK

    Organisations the caller does not belong to are reported as 404, the
    same as organisations that do not exist.
    """
    result = await handler.handle(GetOrganisationBySlug(slug=slug))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return OrganisationResponse.from_dto(result.value)


async def update_organisation(
    request: Request,
    slug: SlugPath,
    data: OrganisationUpdateRequest,
    handler: RenameOrganisationHandler = Depends(get_rename_organisation_handler),
) -> OrganisationResponse | JSONResponse:
    """Rename an organisation.

    PATCH /api/v1/organisations/{slug} → 200 OK

    Returns:
        OrganisationResponse as stored after the rename.
        JSONResponse with RFC 7807 error on failure (400/403/404/409).
    """
    command = RenameOrganisation(organisation_slug=slug, name=data.name, slug=data.slug)
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return OrganisationResponse.from_dto(result.value)


async def delete_organisation(
    request: Request,
    slug: SlugPath,
    handler: DeleteOrganisationHandler = Depends(get_delete_organisation_handler),
) -> Response:
    """Soft delete an organisation.

    DELETE /api/v1/organisations/{slug} → 204 No Content

    The slug stays reserved after deletion.
    """
    result = await handler.handle(DeleteOrganisation(organisation_slug=slug))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id(),
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
