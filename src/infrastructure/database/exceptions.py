"""Exceptions for database operations."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StorageUnavailableError(DatabaseError):
    """Raised when the backing store cannot be reached or used."""

    pass
