"""Base model and mixins for all database entities.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Adds updated_at
- SoftDeleteMixin: Adds nullable deleted_at
- BaseMutableModel: Base for mutable models (id, created_at, updated_at)
- BaseSoftDeletableModel: Mutable models that are soft-deleted

Following hexagonal architecture:
- This is an infrastructure concern (database implementation detail)
- Domain entities should NOT inherit from this
- Domain entities are mapped to/from database models by repositories

Architecture:
    BaseModel (id, created_at)
        ↑
        └── BaseMutableModel (+ updated_at via TimestampMixin)
                ↑
                └── BaseSoftDeletableModel (+ deleted_at via SoftDeleteMixin)
                    ├── OrganisationModel
                    └── MembershipModel

Domain entities own their timestamps (aggregates set created_at, updated_at
and deleted_at themselves); the server defaults only cover rows written
outside the repositories. SQLAlchemy's generic Uuid type keeps the models
usable on both PostgreSQL and SQLite.
"""

from datetime import datetime
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides common fields that ALL database models need:
    - id: UUID primary key (UUIDv7, time-ordered)
    - created_at: Timestamp when record was created (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Mixin for mutable models that track updates."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class SoftDeleteMixin:
    """Mixin for rows that are hidden rather than removed.

    A non-null deleted_at marks the row as deleted. Access policies filter
    such rows out of every read.
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models (id, created_at, updated_at)."""

    __abstract__ = True


class BaseSoftDeletableModel(SoftDeleteMixin, BaseMutableModel):
    """Base class for mutable, soft-deleted models.

    Provides id, created_at, updated_at and deleted_at.
    """

    __abstract__ = True
