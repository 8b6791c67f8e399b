"""Password hashing with bcrypt."""

import asyncio

import bcrypt

DEFAULT_ROUNDS = 12
MIN_ROUNDS = 4
MAX_ROUNDS = 31
MAX_PASSWORD_BYTES = 72  # bcrypt ignores/rejects input beyond this


class PasswordHasher:
    """Salted, adaptive password hashing.

    Every hash embeds its own random salt and cost factor, so verification
    needs nothing but the stored string. Hashing is CPU-bound by design; use
    the async variants from request handlers so the work runs on a worker
    thread instead of the event loop.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt log2 work factor.

        Raises:
            ValueError: If rounds is outside the range bcrypt accepts.
        """
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ValueError(f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password.

        Returns:
            Self-contained bcrypt hash string.

        Raises:
            ValueError: If the password is empty or too long for bcrypt.
        """
        encoded = password.encode("utf-8")
        if not encoded:
            raise ValueError("Password must not be empty")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed: str | None) -> bool:
        """Check a plaintext password against a stored hash.

        Never raises: a missing or corrupted hash simply fails verification.
        """
        if not password or not hashed:
            return False

        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False

        try:
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    async def hash_async(self, password: str) -> str:
        """Hash on a worker thread."""
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed: str | None) -> bool:
        """Verify on a worker thread."""
        return await asyncio.to_thread(self.verify, password, hashed)

