"""create_organisations_and_memberships

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create organisations and memberships tables."""
    op.create_table(
        "organisations",
        # Primary key and timestamps from BaseSoftDeletableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="Organisation display name",
        ),
        sa.Column(
            "slug",
            sa.String(length=100),
            nullable=False,
            comment="Unique URL-safe identifier (lowercase kebab-case)",
        ),
        sa.Column(
            "owner_id",
            sa.Uuid(),
            nullable=False,
            comment="User who owns the organisation (immutable)",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_organisations")),
    )
    op.create_index(
        op.f("ix_organisations_slug"), "organisations", ["slug"], unique=True
    )
    op.create_index(
        op.f("ix_organisations_owner_id"), "organisations", ["owner_id"], unique=False
    )

    op.create_table(
        "memberships",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="Member's user id",
        ),
        sa.Column(
            "organisation_id",
            sa.Uuid(),
            nullable=False,
            comment="FK to organisations table",
        ),
        sa.Column(
            "role",
            sa.String(length=32),
            server_default="ORG_MEMBER",
            nullable=False,
            comment="Organisation role (ORG_ADMIN, ORG_MEMBER)",
        ),
        sa.ForeignKeyConstraint(
            ["organisation_id"],
            ["organisations.id"],
            name=op.f("fk_memberships_organisation_id_organisations"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_memberships")),
        sa.UniqueConstraint(
            "user_id",
            "organisation_id",
            name="uq_memberships_user_organisation",
        ),
    )
    op.create_index(
        op.f("ix_memberships_user_id"), "memberships", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_memberships_organisation_id"),
        "memberships",
        ["organisation_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop memberships and organisations tables."""
    op.drop_index(op.f("ix_memberships_organisation_id"), table_name="memberships")
    op.drop_index(op.f("ix_memberships_user_id"), table_name="memberships")
    op.drop_table("memberships")
    op.drop_index(op.f("ix_organisations_owner_id"), table_name="organisations")
    op.drop_index(op.f("ix_organisations_slug"), table_name="organisations")
    op.drop_table("organisations")
