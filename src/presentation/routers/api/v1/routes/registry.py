"""ROUTE_REGISTRY: every v1 endpoint, mounted at startup by the generator.

All eleven routes require the gateway principal, so each also documents a 401
(added by the generator). Errors listed here are the ones the handler or
the repository policies can produce for that route.
"""

from src.presentation.routers.api.v1.memberships import (
    add_membership,
    get_membership,
    list_my_memberships,
    list_organisation_memberships,
    remove_membership,
    update_membership,
)
from src.presentation.routers.api.v1.organisations import (
    create_organisation,
    delete_organisation,
    get_organisation,
    list_organisations,
    update_organisation,
)
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)
from src.schemas.organisation_schemas import (
    MembershipListResponse,
    MembershipResponse,
    OrganisationListResponse,
    OrganisationResponse,
)

_PRINCIPAL = AuthPolicy(level=AuthLevel.PRINCIPAL)

INVALID_NAME_OR_SLUG = ErrorSpec(status=400, description="Invalid name or slug")
FORBIDDEN = ErrorSpec(status=403, description="Caller is not an admin of the organisation")
ORGANISATION_NOT_FOUND = ErrorSpec(status=404, description="Organisation not found")
MEMBERSHIP_NOT_FOUND = ErrorSpec(
    status=404, description="Organisation or membership not found"
)
SLUG_TAKEN = ErrorSpec(status=409, description="Slug already taken")

_ORGANISATIONS = ["Organisations"]
_MEMBERSHIPS = ["Memberships"]

ROUTE_REGISTRY: list[RouteMetadata] = [
    # Organisations
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/organisations",
        handler=create_organisation,
        tags=_ORGANISATIONS,
        summary="Create organisation",
        description="Create an organisation. The caller becomes its owner and first admin.",
        response_model=OrganisationResponse,
        status_code=201,
        errors=[INVALID_NAME_OR_SLUG, SLUG_TAKEN],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/organisations",
        handler=list_organisations,
        tags=_ORGANISATIONS,
        summary="List organisations",
        description="List organisations the caller is a member of, oldest first.",
        response_model=OrganisationListResponse,
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/organisations/{slug}",
        handler=get_organisation,
        tags=_ORGANISATIONS,
        summary="Get organisation",
        description="Get one organisation with its active members.",
        response_model=OrganisationResponse,
        errors=[ORGANISATION_NOT_FOUND],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.PATCH,
        path="/organisations/{slug}",
        handler=update_organisation,
        tags=_ORGANISATIONS,
        summary="Rename organisation",
        description="Change the organisation name and optionally its slug.",
        response_model=OrganisationResponse,
        errors=[INVALID_NAME_OR_SLUG, FORBIDDEN, ORGANISATION_NOT_FOUND, SLUG_TAKEN],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/organisations/{slug}",
        handler=delete_organisation,
        tags=_ORGANISATIONS,
        summary="Delete organisation",
        description="Soft delete the organisation. Its slug stays reserved.",
        status_code=204,
        errors=[FORBIDDEN, ORGANISATION_NOT_FOUND],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_PRINCIPAL,
    ),
    # Memberships
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/organisations/{slug}/memberships",
        handler=list_organisation_memberships,
        tags=_MEMBERSHIPS,
        summary="List organisation members",
        description="List active members of an organisation, oldest first.",
        response_model=MembershipListResponse,
        errors=[ORGANISATION_NOT_FOUND],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/organisations/{slug}/memberships/{membership_id}",
        handler=get_membership,
        tags=_MEMBERSHIPS,
        summary="Get membership",
        description="Get one membership. It must belong to the organisation in the path.",
        response_model=MembershipResponse,
        errors=[MEMBERSHIP_NOT_FOUND],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/organisations/{slug}/memberships",
        handler=add_membership,
        tags=_MEMBERSHIPS,
        summary="Add member",
        description="Add a user to the organisation with the given role.",
        response_model=MembershipResponse,
        status_code=201,
        errors=[
            FORBIDDEN,
            ORGANISATION_NOT_FOUND,
            ErrorSpec(status=409, description="User is already a member"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.PATCH,
        path="/organisations/{slug}/memberships/{membership_id}",
        handler=update_membership,
        tags=_MEMBERSHIPS,
        summary="Change member role",
        response_model=MembershipResponse,
        errors=[FORBIDDEN, MEMBERSHIP_NOT_FOUND],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/organisations/{slug}/memberships/{membership_id}",
        handler=remove_membership,
        tags=_MEMBERSHIPS,
        summary="Remove member",
        description="Remove a member. The owner cannot be removed.",
        status_code=204,
        errors=[
            ErrorSpec(status=400, description="Owner cannot be removed"),
            FORBIDDEN,
            MEMBERSHIP_NOT_FOUND,
        ],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_PRINCIPAL,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/users/me/memberships",
        handler=list_my_memberships,
        tags=_MEMBERSHIPS,
        summary="List my memberships",
        description="List the caller's memberships across organisations, newest first.",
        response_model=MembershipListResponse,
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_PRINCIPAL,
    ),
]
