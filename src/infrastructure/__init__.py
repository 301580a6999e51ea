"""Infrastructure layer - Adapters for domain protocols.

This layer contains implementations of domain protocols (ports):
- Database repositories with row-level access policies
- In-memory event bus and event handlers
- Structured logging

Structure:
- persistence/: SQLAlchemy models, repositories and the unit of work
- authorization/: Row-level access policies applied by repositories
- events/: Event bus and handlers
- logging/: structlog console adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
