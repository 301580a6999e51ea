"""Row-level access policies for organisations and memberships.

A policy turns "who is asking" into SQL filter expressions. Repositories
AND the filter into every statement they issue, so rows the principal may
not see are never loaded, and rows the principal may not change are never
matched by an UPDATE or DELETE.

Policies:
    - UnrestrictedPolicy: No filtering. Used for organisation creation and
      slug checks, which must see every row (deleted ones included).
    - OrganisationAccessPolicy: Members read, admins write.
    - MembershipAccessPolicy: Members of the owning organisation read;
      admins of it write.

Authorization lives here and nowhere else. Domain entities never check the
caller.
"""

from enum import Enum
from typing import Any, Protocol
from uuid import UUID

from sqlalchemy import ColumnElement, and_, exists, select
from sqlalchemy.orm import aliased

from src.domain.enums.organisation_role import OrganisationRole
from src.infrastructure.persistence.models.membership import (
    Membership as MembershipModel,
)
from src.infrastructure.persistence.models.organisation import (
    Organisation as OrganisationModel,
)


class PolicyOperation(str, Enum):
    """Statement kind a policy rejected."""

    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class PolicyRejectedError(Exception):
    """Row exists but the current policy hides it or forbids the write.

    Raised by repositories, never by the domain. The HTTP layer maps it to
    403 Forbidden.

    Attributes:
        operation: Which statement was rejected.
        resource_type: Table-level name of the resource ("organisation").
        resource_id: Identifier of the rejected row.
    """

    def __init__(
        self,
        *,
        operation: PolicyOperation,
        resource_type: str,
        resource_id: UUID | None = None,
    ) -> None:
        self.operation = operation
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{operation.value} of {resource_type} {resource_id} rejected by access policy"
        )


class AccessPolicy(Protocol):
    """Supplies WHERE clauses for reads and writes on a model.

    Returning None means "no restriction".
    """

    def read_filter(self, model: type[Any]) -> ColumnElement[bool] | None: ...

    def write_filter(self, model: type[Any]) -> ColumnElement[bool] | None: ...


class UnrestrictedPolicy:
    """Policy that filters nothing."""

    def read_filter(self, model: type[Any]) -> ColumnElement[bool] | None:
        return None

    def write_filter(self, model: type[Any]) -> ColumnElement[bool] | None:
        return None


def _principal_membership(
    principal_id: UUID,
    organisation_id: Any,
    *,
    admin_only: bool = False,
) -> ColumnElement[bool]:
    """EXISTS clause: principal holds an active membership in the organisation.

    Uses an alias so the clause can be correlated against the memberships
    table itself.
    """
    principal = aliased(MembershipModel, name="principal_membership")
    conditions = [
        principal.organisation_id == organisation_id,
        principal.user_id == principal_id,
        principal.deleted_at.is_(None),
    ]
    if admin_only:
        conditions.append(principal.role == OrganisationRole.ORG_ADMIN.value)
    return exists().where(and_(*conditions))


class OrganisationAccessPolicy:
    """Principal-scoped policy for the organisations table.

    Read: organisation not deleted and the principal is an active member.
    Write: organisation not deleted and the principal is an active admin.

    Example:
        >>> policy = OrganisationAccessPolicy(principal_id)
        >>> stmt = select(OrganisationModel).where(policy.read_filter(OrganisationModel))
    """

    def __init__(self, principal_id: UUID) -> None:
        self.principal_id = principal_id

    def read_filter(self, model: type[Any]) -> ColumnElement[bool] | None:
        _require(model, OrganisationModel)
        return and_(
            OrganisationModel.deleted_at.is_(None),
            _principal_membership(self.principal_id, OrganisationModel.id),
        )

    def write_filter(self, model: type[Any]) -> ColumnElement[bool] | None:
        _require(model, OrganisationModel)
        return and_(
            OrganisationModel.deleted_at.is_(None),
            _principal_membership(
                self.principal_id, OrganisationModel.id, admin_only=True
            ),
        )


class MembershipAccessPolicy:
    """Principal-scoped policy for the memberships table.

    Read: membership and its organisation are not deleted and the principal
    is an active member of that organisation.
    Write: membership not deleted and the principal is an active admin of
    its organisation.
    """

    def __init__(self, principal_id: UUID) -> None:
        self.principal_id = principal_id

    def read_filter(self, model: type[Any]) -> ColumnElement[bool] | None:
        _require(model, MembershipModel)
        live_organisation = (
            select(OrganisationModel.id)
            .where(
                OrganisationModel.id == MembershipModel.organisation_id,
                OrganisationModel.deleted_at.is_(None),
            )
            .exists()
        )
        return and_(
            MembershipModel.deleted_at.is_(None),
            live_organisation,
            _principal_membership(self.principal_id, MembershipModel.organisation_id),
        )

    def write_filter(self, model: type[Any]) -> ColumnElement[bool] | None:
        _require(model, MembershipModel)
        return and_(
            MembershipModel.deleted_at.is_(None),
            _principal_membership(
                self.principal_id, MembershipModel.organisation_id, admin_only=True
            ),
        )


def _require(model: type[Any], expected: type[Any]) -> None:
    if model is not expected:
        raise TypeError(
            f"{expected.__name__} policy cannot filter {getattr(model, '__name__', model)}"
        )
