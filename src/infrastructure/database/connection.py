"""SQLite database connection management."""

import asyncio
import sqlite3
from pathlib import Path

import aiosqlite
import structlog

from src.infrastructure.database.exceptions import StorageUnavailableError

logger = structlog.get_logger()

# SQL for creating tables
_CREATE_TABLES = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT UNIQUE NOT NULL,
    hashed_password TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class Database:
    """Async SQLite database wrapper.

    Provides connection management and query execution for SQLite.
    Uses aiosqlite for async operations. Each statement and its commit run
    under one lock, so concurrent tasks sharing the connection cannot commit
    or roll back each other's work.
    """

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the database.

        Args:
            db_path: Path to the SQLite database file.
        """
        self._db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        """Whether a connection is currently open."""
        return self._connection is not None

    async def connect(self) -> None:
        """Connect to the database and create tables if needed.

        Raises:
            StorageUnavailableError: If the database file cannot be opened.
        """
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._connection = await aiosqlite.connect(self._db_path)
            self._connection.row_factory = aiosqlite.Row
            await self._connection.executescript(_CREATE_TABLES)
            await self._connection.commit()
        except sqlite3.Error as e:
            logger.error("database_connect_failed", path=str(self._db_path), error=str(e))
            raise StorageUnavailableError("Could not open database") from e

        logger.info("database_connected", path=str(self._db_path))

    async def disconnect(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("database_disconnected", path=str(self._db_path))

    async def execute(
        self,
        sql: str,
        parameters: tuple[object, ...] | dict[str, object] | None = None,
    ) -> int:
        """Execute a SQL statement and commit it.

        Args:
            sql: SQL statement to execute.
            parameters: Optional parameters for the statement.

        Returns:
            Number of rows affected.

        Raises:
            sqlite3.IntegrityError: If a constraint is violated.
            StorageUnavailableError: If the database is unusable.
        """
        async with self._lock:
            connection = self._require_connection()
            try:
                cursor = await connection.execute(sql, parameters or ())
                await connection.commit()
            except sqlite3.IntegrityError:
                await connection.rollback()
                raise
            except sqlite3.Error as e:
                logger.error("database_execute_failed", error=str(e))
                raise StorageUnavailableError("Database operation failed") from e
            return cursor.rowcount

    async def fetch_one(
        self,
        sql: str,
        parameters: tuple[object, ...] | dict[str, object] | None = None,
    ) -> sqlite3.Row | None:
        """Fetch a single row.

        Args:
            sql: SQL query to execute.
            parameters: Optional parameters for the query.

        Returns:
            The first row or None.

        Raises:
            StorageUnavailableError: If the database is unusable.
        """
        async with self._lock:
            connection = self._require_connection()
            try:
                async with connection.execute(sql, parameters or ()) as cursor:
                    return await cursor.fetchone()
            except sqlite3.Error as e:
                logger.error("database_fetch_failed", error=str(e))
                raise StorageUnavailableError("Database query failed") from e

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageUnavailableError("Database not connected")
        return self._connection


# Global database instance
_database: Database | None = None


def get_database() -> Database:
    """Get the global database instance.

    Returns:
        The database instance.

    Raises:
        StorageUnavailableError: If database not initialized.
    """
    if _database is None:
        raise StorageUnavailableError("Database not initialized. Call init_database first.")
    return _database


async def init_database(db_path: str | Path) -> Database:
    """Initialize and connect to the database.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        Connected database instance.
    """
    global _database
    _database = Database(db_path)
    await _database.connect()
    return _database
