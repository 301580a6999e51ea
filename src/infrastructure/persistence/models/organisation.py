"""Organisation database model.

Stores the organisation aggregate root row. Memberships live in their own
table and are loaded eagerly through the ``memberships`` relationship.

Slugs stay unique across soft-deleted rows, so a deleted organisation keeps
its slug reserved.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.persistence.base import BaseSoftDeletableModel

if TYPE_CHECKING:
    from src.infrastructure.persistence.models.membership import Membership


class Organisation(BaseSoftDeletableModel):
    """Organisation model.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at / updated_at / deleted_at: from the base classes
        name: Display name (2-100 characters)
        slug: Unique URL-safe identifier
        owner_id: Owner's user id (opaque, issued by the identity provider)

    Relationships:
        - memberships: One-to-many; rows are removed by ON DELETE CASCADE
    """

    __tablename__ = "organisations"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Organisation display name",
    )

    slug: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Unique URL-safe identifier (lowercase kebab-case)",
    )

    owner_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="User who owns the organisation (immutable)",
    )

    memberships: Mapped[list["Membership"]] = relationship(
        back_populates="organisation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Membership.created_at",
    )
