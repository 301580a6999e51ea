"""SQLAlchemy persistence: engine, models, repositories, unit of work."""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
