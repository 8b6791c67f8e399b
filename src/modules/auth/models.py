"""User and identity domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """User domain model.

    Public view of an account. The password hash is deliberately absent;
    it is only readable through UserCredentials.

    Attributes:
        id: Unique user identifier, generated at creation.
        name: Display name (the only mutable field).
        email: Normalized email address (used for login).
        created_at: When the user was created.
        updated_at: When the user was last updated.
    """

    id: UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, object]) -> "User":
        """Create a User from a database row.

        Args:
            row: Database row as a dictionary.

        Returns:
            User instance.
        """
        return cls(
            id=UUID(str(row["id"])),
            name=str(row["name"]),
            email=str(row["email"]),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            updated_at=datetime.fromisoformat(str(row["updated_at"])),
        )

    def to_identity(self) -> "Identity":
        """Return the public claims for this user."""
        return Identity(id=self.id, name=self.name, email=self.email)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller's public claims."""

    id: UUID
    name: str
    email: str


@dataclass(frozen=True)
class UserCredentials:
    """A user together with the stored password hash.

    hashed_password is None for accounts created without a password.
    """

    user: User
    hashed_password: str | None = field(repr=False)

    @classmethod
    def from_row(cls, row: dict[str, object]) -> "UserCredentials":
        hashed = row["hashed_password"]
        return cls(
            user=User.from_row(row),
            hashed_password=str(hashed) if hashed else None,
        )
