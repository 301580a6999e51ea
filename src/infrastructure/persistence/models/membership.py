"""Membership database model.

One row per (user, organisation) pair. The unique constraint is what
actually prevents duplicate memberships when two requests race past the
aggregate's in-memory check.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.persistence.base import BaseSoftDeletableModel

if TYPE_CHECKING:
    from src.infrastructure.persistence.models.organisation import Organisation


class Membership(BaseSoftDeletableModel):
    """Membership model.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at / updated_at / deleted_at: from the base classes
        user_id: Member's user id (opaque)
        organisation_id: FK to organisations (cascade delete)
        role: ORG_ADMIN or ORG_MEMBER

    Constraints:
        - uq_memberships_user_organisation: (user_id, organisation_id)
    """

    __tablename__ = "memberships"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Member's user id",
    )

    organisation_id: Mapped[UUID] = mapped_column(
        ForeignKey("organisations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="FK to organisations table",
    )

    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        server_default="ORG_MEMBER",
        comment="Organisation role (ORG_ADMIN, ORG_MEMBER)",
    )

    organisation: Mapped["Organisation"] = relationship(back_populates="memberships")

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "organisation_id",
            name="uq_memberships_user_organisation",
        ),
    )
