"""Generic SQLAlchemy repository with row-level policy and event hand-off.

Concrete repositories subclass ``SQLAlchemyRepositoryBase``, set ``model``
and ``resource_type``, and implement the mapping hooks:

    _to_domain(model) -> entity      (abstract)
    _to_model(entity) -> model       (used by create)
    _values(entity) -> dict          (column values written by update)

Optional hooks:

    _load_options()                 (eager loads applied to every read)
    _write_children(entity)         (runs after the parent UPDATE)
    _default_order                  (ORDER BY when the caller gives none)

Every read ANDs the policy's read filter into the WHERE clause. Every
UPDATE and DELETE ANDs the write filter. When a write matches no row the
repository looks the row up without any filter to tell a policy rejection
apart from a missing row.

Event hand-off after a successful write (exactly one applies):
    1. Bound unit of work: events are queued and published after commit.
    2. Event bus: each event is published immediately.
    3. Neither: events are put back on the entity.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, NoReturn, Self, TypeVar
from uuid import UUID

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.repositories import Page
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol
from src.infrastructure.authorization.organisation_policy import (
    AccessPolicy,
    PolicyOperation,
    PolicyRejectedError,
)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes.

    SQLite drops tzinfo on the way back; PostgreSQL values pass through.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


TDomain = TypeVar("TDomain")
TModel = TypeVar("TModel")


class SQLAlchemyRepositoryBase(ABC, Generic[TDomain, TModel]):
    """Base adapter implementing the generic BaseRepository protocol.

    Attributes:
        session: Session every statement runs on.
        policy: Row-level access policy.
        event_bus: Optional bus for publishing outside a unit of work.
        uow: Optional unit of work that receives drained events.
        logger: Optional structured logger.
    """

    model: ClassVar[type[Any]]
    resource_type: ClassVar[str] = "resource"

    def __init__(
        self,
        session: AsyncSession,
        *,
        policy: AccessPolicy,
        event_bus: EventBusProtocol | None = None,
        uow: UnitOfWorkProtocol | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.session = session
        self.policy = policy
        self.event_bus = event_bus
        self.uow = uow
        self.logger = logger

    def with_transaction(
        self, session: AsyncSession, uow: UnitOfWorkProtocol | None = None
    ) -> Self:
        """Return a copy bound to ``session`` and ``uow``.

        The original repository is left untouched, so one prototype can
        serve many concurrent transactions.
        """
        bound = copy.copy(self)
        bound.session = session
        bound.uow = uow
        return bound

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def _to_domain(self, model: TModel) -> TDomain:
        """Map a loaded row to the domain entity."""

    def _to_model(self, entity: TDomain) -> TModel:
        """Build the row inserted by ``create``.

        Write-side hook: read-only repositories (MembershipRepository) leave
        it out and never reach it.
        """
        raise NotImplementedError(f"{type(self).__name__} must implement _to_model()")

    def _values(self, entity: TDomain) -> dict[str, Any]:
        """Column values written by ``update``. Write-side hook, like ``_to_model``."""
        raise NotImplementedError(f"{type(self).__name__} must implement _values()")

    def _load_options(self) -> Sequence[Any]:
        return ()

    async def _write_children(self, entity: TDomain) -> None:
        return None

    @property
    def _default_order(self) -> Sequence[Any]:
        return (self.model.created_at, self.model.id)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _select(self, *where: Any) -> Select[Any]:
        stmt = (
            select(self.model)
            .options(*self._load_options())
            .execution_options(populate_existing=True)
        )
        read_filter = self.policy.read_filter(self.model)
        if read_filter is not None:
            stmt = stmt.where(read_filter)
        if where:
            stmt = stmt.where(*where)
        return stmt

    def _ordered(self, stmt: Select[Any], order_by: Any) -> Select[Any]:
        if order_by is None:
            return stmt.order_by(*self._default_order)
        if isinstance(order_by, (list, tuple)):
            return stmt.order_by(*order_by)
        return stmt.order_by(order_by)

    async def find_by_id(self, entity_id: UUID) -> TDomain | None:
        """Find a readable entity by primary key."""
        result = await self.session.execute(self._select(self.model.id == entity_id))
        model = result.scalar_one_or_none()
        return None if model is None else self._to_domain(model)

    async def find_unique(self, **criteria: Any) -> TDomain | None:
        """Find one readable entity by column equality.

        Raises:
            MultipleResultsFound: The criteria match more than one row.
        """
        result = await self.session.execute(self._select().filter_by(**criteria))
        model = result.scalar_one_or_none()
        return None if model is None else self._to_domain(model)

    async def find_first(self, *where: Any, order_by: Any = None) -> TDomain | None:
        stmt = self._ordered(self._select(*where), order_by).limit(1)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return None if model is None else self._to_domain(model)

    async def find_many(
        self,
        *where: Any,
        order_by: Any = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[TDomain]:
        stmt = self._ordered(self._select(*where), order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count(self, *where: Any) -> int:
        """Count readable rows matching ``where``."""
        stmt = select(func.count()).select_from(self.model)
        read_filter = self.policy.read_filter(self.model)
        if read_filter is not None:
            stmt = stmt.where(read_filter)
        if where:
            stmt = stmt.where(*where)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def find_all_paged(
        self,
        *where: Any,
        limit: int = 20,
        offset: int = 0,
        order_by: Any = None,
    ) -> Page[TDomain]:
        """Return one page plus the total under the same filters.

        Both statements run one after the other on the same session; an
        AsyncSession does not support concurrent statements.
        """
        total = await self.count(*where)
        items = await self.find_many(
            *where, order_by=order_by, limit=limit, offset=offset
        )
        return Page(items=items, total=total, limit=limit, offset=offset)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, entity: TDomain) -> TDomain:
        """Insert the entity (and any cascaded children)."""
        self.session.add(self._to_model(entity))
        await self.session.flush()
        await self._publish_events(entity)
        if self.logger is not None:
            self.logger.debug(
                "repository_row_created",
                resource_type=self.resource_type,
                resource_id=str(self._entity_id(entity)),
            )
        return entity

    async def update(self, entity: TDomain) -> TDomain:
        """Write the entity's columns, then its children, then read it back.

        Raises:
            NoResultFound: No row with this id exists.
            PolicyRejectedError: The row exists but the write filter excludes
                it (operation=UPDATE), or the written row is no longer
                readable (operation=READ).
        """
        entity_id = self._entity_id(entity)
        await self._update_row(entity_id, self._values(entity))
        await self._write_children(entity)
        stored = await self._read_back(entity_id)
        await self._publish_events(entity)
        return stored

    async def save(self, entity: TDomain) -> TDomain:
        """Update the entity, creating it when no row exists yet."""
        try:
            return await self.update(entity)
        except NoResultFound:
            return await self.create(entity)

    async def upsert(self, entity: TDomain) -> TDomain:
        return await self.save(entity)

    async def delete(self, entity: TDomain) -> None:
        """Hard-delete the row under the write filter.

        Raises:
            NoResultFound: No row with this id exists.
            PolicyRejectedError: The write filter excludes the row.
        """
        entity_id = self._entity_id(entity)
        stmt = delete(self.model).where(self.model.id == entity_id)
        write_filter = self.policy.write_filter(self.model)
        if write_filter is not None:
            stmt = stmt.where(write_filter)
        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self._classify_miss(entity_id, PolicyOperation.DELETE)
        await self._publish_events(entity)

    async def soft_delete(self, entity: TDomain) -> None:
        """Set deleted_at on the row.

        A write the policy refuses (no row matched) always propagates. Once
        the write is acknowledged, a row the read policy now hides is the
        expected outcome; the read-back only confirms the row still exists.

        Raises:
            NoResultFound: No row with this id exists.
            PolicyRejectedError: The write filter excludes the row
                (operation=UPDATE).
        """
        entity_id = self._entity_id(entity)
        deleted_at = getattr(entity, "deleted_at", None) or datetime.now(UTC)
        await self._update_row(
            entity_id, {"deleted_at": deleted_at, "updated_at": deleted_at}
        )
        if await self.find_by_id(entity_id) is None:
            if not await self._row_exists(entity_id):
                raise NoResultFound(f"{self.resource_type} {entity_id} not found")
            if self.logger is not None:
                self.logger.debug(
                    "soft_deleted_row_hidden",
                    resource_type=self.resource_type,
                    resource_id=str(entity_id),
                )
        await self._publish_events(entity)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _entity_id(entity: Any) -> UUID:
        return entity.id

    async def _update_row(self, entity_id: UUID, values: dict[str, Any]) -> None:
        stmt = update(self.model).where(self.model.id == entity_id).values(**values)
        write_filter = self.policy.write_filter(self.model)
        if write_filter is not None:
            stmt = stmt.where(write_filter)
        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self._classify_miss(entity_id, PolicyOperation.UPDATE)

    async def _read_back(self, entity_id: UUID) -> TDomain:
        stored = await self.find_by_id(entity_id)
        if stored is not None:
            return stored
        await self._classify_miss(entity_id, PolicyOperation.READ)

    async def _row_exists(self, entity_id: UUID) -> bool:
        result = await self.session.execute(
            select(exists().where(self.model.id == entity_id))
        )
        return bool(result.scalar())

    async def _classify_miss(
        self, entity_id: UUID, operation: PolicyOperation
    ) -> NoReturn:
        """Raise the right error for a statement that matched nothing."""
        if await self._row_exists(entity_id):
            if self.logger is not None:
                self.logger.info(
                    "policy_rejected",
                    operation=operation.value,
                    resource_type=self.resource_type,
                    resource_id=str(entity_id),
                )
            raise PolicyRejectedError(
                operation=operation,
                resource_type=self.resource_type,
                resource_id=entity_id,
            )
        raise NoResultFound(f"{self.resource_type} {entity_id} not found")

    async def _publish_events(self, entity: Any) -> None:
        if not isinstance(entity, AggregateRoot):
            return
        events = entity.pull_events()
        if not events:
            return
        if self.uow is not None:
            self.uow.queue(events)
        elif self.event_bus is not None:
            for event in events:
                await self.event_bus.publish(event)
        else:
            entity.restore_events(events)
