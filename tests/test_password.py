"""Tests for password hashing."""

import threading

import bcrypt
import pytest

from src.modules.auth import PasswordHasher
from src.modules.auth.password import MAX_PASSWORD_BYTES


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheapest work factor, to keep the suite fast."""
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_is_bcrypt(self, hasher: PasswordHasher) -> None:
        """Should produce a bcrypt hash carrying the configured cost."""
        hashed = hasher.hash("secure_password123")

        assert hashed != "secure_password123"
        assert hashed.startswith("$2")
        assert hashed.split("$")[2] == "04"

    def test_verify_correct_password(self, hasher: PasswordHasher) -> None:
        """Should verify the password that produced the hash."""
        hashed = hasher.hash("secure_password123")

        assert hasher.verify("secure_password123", hashed)

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        """Should reject a different password."""
        hashed = hasher.hash("correct_password")

        assert not hasher.verify("wrong_password", hashed)

    def test_same_password_hashes_differently(self, hasher: PasswordHasher) -> None:
        """Should salt each hash so outputs differ but both verify."""
        hash1 = hasher.hash("same_password")
        hash2 = hasher.hash("same_password")

        assert hash1 != hash2
        assert hasher.verify("same_password", hash1)
        assert hasher.verify("same_password", hash2)

    @pytest.mark.parametrize(
        "corrupted",
        ["", "not-a-hash", "$2b$04$tooshort", "$2b$99$" + "a" * 53],
    )
    def test_verify_malformed_hash_returns_false(
        self, hasher: PasswordHasher, corrupted: str
    ) -> None:
        """Should return False instead of raising for corrupted hashes."""
        assert not hasher.verify("password123", corrupted)

    def test_verify_missing_hash_returns_false(self, hasher: PasswordHasher) -> None:
        """Should return False for accounts without a password hash."""
        assert not hasher.verify("password123", None)

    def test_verify_empty_password_returns_false(self, hasher: PasswordHasher) -> None:
        """Should never accept an empty password."""
        hashed = hasher.hash("password123")

        assert not hasher.verify("", hashed)

    def test_hash_rejects_empty_password(self, hasher: PasswordHasher) -> None:
        """Should refuse to hash an empty password."""
        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    def test_hash_rejects_overlong_password(self, hasher: PasswordHasher) -> None:
        """Should refuse input beyond bcrypt's byte limit."""
        with pytest.raises(ValueError, match="at most"):
            hasher.hash("x" * (MAX_PASSWORD_BYTES + 1))

    def test_verify_rejects_overlong_password(self, hasher: PasswordHasher) -> None:
        """Should not match a longer password sharing the first 72 bytes."""
        password = "a" * MAX_PASSWORD_BYTES
        hashed = hasher.hash(password)

        assert hasher.verify(password, hashed)
        assert not hasher.verify(password + "WRONG-SUFFIX", hashed)

    def test_multibyte_password_at_limit(self, hasher: PasswordHasher) -> None:
        """Should count bytes, not characters."""
        password = "é" * (MAX_PASSWORD_BYTES // 2)

        assert hasher.verify(password, hasher.hash(password))

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rejects_out_of_range_rounds(self, rounds: int) -> None:
        """Should reject work factors bcrypt cannot use."""
        with pytest.raises(ValueError, match="rounds"):
            PasswordHasher(rounds=rounds)

    def test_default_rounds(self) -> None:
        """Should default to a work factor of 12."""
        assert PasswordHasher().rounds == 12

    @pytest.mark.asyncio
    async def test_async_variants(self, hasher: PasswordHasher) -> None:
        """Should hash and verify on a worker thread."""
        hashed = await hasher.hash_async("threaded_password")

        assert await hasher.verify_async("threaded_password", hashed)
        assert not await hasher.verify_async("other_password", hashed)

    @pytest.mark.asyncio
    async def test_async_variants_leave_event_loop(
        self, hasher: PasswordHasher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should run bcrypt off the event loop thread."""
        loop_thread = threading.get_ident()
        threads: list[int] = []
        real_hashpw = bcrypt.hashpw
        real_checkpw = bcrypt.checkpw

        def recording_hashpw(password: bytes, salt: bytes) -> bytes:
            threads.append(threading.get_ident())
            return real_hashpw(password, salt)

        def recording_checkpw(password: bytes, hashed: bytes) -> bool:
            threads.append(threading.get_ident())
            return real_checkpw(password, hashed)

        monkeypatch.setattr(bcrypt, "hashpw", recording_hashpw)
        monkeypatch.setattr(bcrypt, "checkpw", recording_checkpw)

        hashed = await hasher.hash_async("threaded_password")
        assert await hasher.verify_async("threaded_password", hashed)

        assert len(threads) == 2
        assert loop_thread not in threads

    def test_verifies_hash_from_other_cost(self, hasher: PasswordHasher) -> None:
        """Should verify hashes made with any work factor."""
        hashed = PasswordHasher(rounds=5).hash("password123")

        assert hasher.verify("password123", hashed)

