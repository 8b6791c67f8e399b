"""User repository for database operations."""

import sqlite3
from datetime import datetime, timezone
from uuid import UUID, uuid4

import structlog

from src.infrastructure.database import Database
from src.modules.auth.exceptions import DuplicateEmailError
from src.modules.auth.models import User, UserCredentials

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    """Normalize an email for storage and lookup (trimmed, lowercase)."""
    return email.strip().lower()


class UserRepository:
    """Repository for User persistence.

    Email uniqueness is enforced by the UNIQUE constraint on users.email,
    never by a read-then-write check.
    """

    def __init__(self, database: Database) -> None:
        """Initialize the repository.

        Args:
            database: Database connection.
        """
        self._db = database

    async def create(
        self,
        name: str,
        email: str,
        hashed_password: str | None,
    ) -> User:
        """Create a new user.

        Args:
            name: Display name.
            email: User's email address.
            hashed_password: Password hash, or None for accounts without one.

        Returns:
            The created User.

        Raises:
            DuplicateEmailError: If the email already exists.
            StorageUnavailableError: If the database is unusable.
        """
        user_id = uuid4()
        email = normalize_email(email)
        now = datetime.now(timezone.utc).isoformat()

        try:
            await self._db.execute(
                """
                INSERT INTO users (id, name, email, hashed_password, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (str(user_id), name, email, hashed_password, now, now),
            )
        except sqlite3.IntegrityError as e:
            if "UNIQUE constraint failed" in str(e):
                raise DuplicateEmailError(email) from e
            raise

        logger.info("user_created", user_id=str(user_id))

        return User(
            id=user_id,
            name=name,
            email=email,
            created_at=datetime.fromisoformat(now),
            updated_at=datetime.fromisoformat(now),
        )

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email.

        Args:
            email: The user's email address.

        Returns:
            User if found, None otherwise.
        """
        row = await self._db.fetch_one(
            "SELECT id, name, email, created_at, updated_at FROM users WHERE email = ?",
            (normalize_email(email),),
        )

        if row is None:
            return None

        return User.from_row(dict(row))

    async def get_credentials(self, email: str) -> UserCredentials | None:
        """Get a user and their stored password hash.

        Only credential verification should call this.

        Args:
            email: The user's email address.

        Returns:
            UserCredentials if found, None otherwise.
        """
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE email = ?",
            (normalize_email(email),),
        )

        if row is None:
            return None

        return UserCredentials.from_row(dict(row))

    async def update_name(self, user_id: UUID, name: str) -> User | None:
        """Change a user's display name.

        Args:
            user_id: The user's UUID.
            name: New display name.

        Returns:
            The updated User, or None if no such user.
        """
        now = datetime.now(timezone.utc).isoformat()

        updated = await self._db.execute(
            "UPDATE users SET name = ?, updated_at = ? WHERE id = ?",
            (name, now, str(user_id)),
        )
        if not updated:
            return None

        logger.info("user_updated", user_id=str(user_id))

        row = await self._db.fetch_one(
            "SELECT id, name, email, created_at, updated_at FROM users WHERE id = ?",
            (str(user_id),),
        )
        return User.from_row(dict(row)) if row else None

    async def count(self) -> int:
        """Count total users.

        Returns:
            Number of users.
        """
        row = await self._db.fetch_one("SELECT COUNT(*) as count FROM users")
        return int(row["count"]) if row else 0
