#!/usr/bin/env python3
"""CLI script to provision users.

Usage:
    uv run python scripts/create_user.py "Ada Lovelace" ada@example.com password123
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from src.config import Settings, resolve_jwt_secret
from src.infrastructure.database import StorageUnavailableError, init_database
from src.modules.auth.exceptions import (
    ConfigurationError,
    DuplicateEmailError,
    InputValidationError,
)
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import RegisterRequest
from src.modules.auth.service import AuthService


async def create_user(name: str, email: str, password: str) -> int:
    """Create a user in the database.

    Args:
        name: Display name.
        email: User's email address.
        password: User's password (will be hashed).

    Returns:
        Process exit code.
    """
    settings = Settings()

    try:
        data = RegisterRequest(name=name, email=email, password=password)
        jwt_secret = resolve_jwt_secret(settings)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"✗ Error: {field}: {error['msg']}", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        print("  Please add JWT_SECRET_KEY to your .env file", file=sys.stderr)
        return 1

    try:
        db = await init_database(settings.database_path)
    except StorageUnavailableError as e:
        print(f"✗ Error: {e.message}", file=sys.stderr)
        return 1

    try:
        auth_service = AuthService.create(
            UserRepository(db),
            jwt_secret=jwt_secret,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        user = await auth_service.register(data)
    except (DuplicateEmailError, InputValidationError, StorageUnavailableError) as e:
        print(f"✗ Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        await db.disconnect()

    print(f"✓ Created user: {user.name} <{user.email}>")
    print(f"  User ID: {user.id}")
    print(f"  Created at: {user.created_at}")
    return 0


def main() -> None:
    """Parse arguments and create user."""
    parser = argparse.ArgumentParser(
        description="Create a user account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run python scripts/create_user.py "Ada Lovelace" ada@example.com mypassword
  uv run python scripts/create_user.py "Test User" test1@test.com pass1234
        """,
    )

    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="User's email address")
    parser.add_argument("password", help="User's password (min 8 characters)")

    args = parser.parse_args()

    sys.exit(asyncio.run(create_user(args.name, args.email, args.password)))


if __name__ == "__main__":
    main()
