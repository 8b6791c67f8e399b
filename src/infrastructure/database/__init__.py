"""Database infrastructure for SQLite persistence."""

from src.infrastructure.database.connection import (
    Database,
    get_database,
    init_database,
)
from src.infrastructure.database.exceptions import (
    DatabaseError,
    StorageUnavailableError,
)

__all__ = [
    "Database",
    "DatabaseError",
    "StorageUnavailableError",
    "get_database",
    "init_database",
]
