"""Repository protocols (ports) for domain layer.

Generic persistence contract shared by every aggregate repository.
Implementations bind to a database session and, optionally, a unit of work;
``with_transaction`` returns a new repository bound to a transaction so the
same prototype can be reused across many transactions without cross-talk.

Following hexagonal architecture:
- Domain defines what it needs (protocols/ports)
- Infrastructure provides implementations (adapters)
- Domain has no knowledge of how data is stored
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, Self, TypeVar
from uuid import UUID

if TYPE_CHECKING:
    from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol

T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class Page(Generic[T]):
    """One page of results plus the unpaged total.

    Attributes:
        items: Entities on this page.
        total: Count of all entities matching the same filters.
        limit: Page size requested.
        offset: Number of entities skipped.
    """

    items: list[T]
    total: int
    limit: int
    offset: int


class BaseRepository(Protocol[T]):
    """Base repository protocol defining common operations.

    Every mutating method drains the entity's buffered domain events after
    the write succeeds and hands them on: to the bound unit of work if there
    is one, otherwise straight to the event bus, otherwise back onto the
    entity.
    """

    async def find_by_id(self, entity_id: UUID) -> T | None: ...

    async def find_unique(self, **criteria: Any) -> T | None: ...

    async def find_first(self, *where: Any, order_by: Any = None) -> T | None: ...

    async def find_many(
        self,
        *where: Any,
        order_by: Any = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[T]: ...

    async def find_all_paged(
        self, *where: Any, limit: int = 20, offset: int = 0, order_by: Any = None
    ) -> Page[T]: ...

    async def count(self, *where: Any) -> int: ...

    async def create(self, entity: T) -> T: ...

    async def update(self, entity: T) -> T: ...

    async def save(self, entity: T) -> T:
        """Update the entity, creating it when no row exists yet."""
        ...

    async def upsert(self, entity: T) -> T: ...

    async def delete(self, entity: T) -> None: ...

    async def soft_delete(self, entity: T) -> None: ...

    def with_transaction(
        self, session: Any, uow: "UnitOfWorkProtocol | None" = None
    ) -> Self:
        """Return a new repository bound to ``session`` and ``uow``."""
        ...
