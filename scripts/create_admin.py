#!/usr/bin/env python
"""Create a dashboard admin user."""

import argparse
import asyncio
import sys

from attendance_api.database import async_session_maker, engine
from attendance_api.repositories.admin_user_repository import AdminUserRepository
from attendance_api.security.password import get_password_service


async def create_admin(username: str, password: str) -> bool:
    """Create an admin user with a local password."""
    password_service = get_password_service()

    # Validate password
    is_valid, errors = password_service.validate_password_strength(password)
    if not is_valid:
        print(f"Password validation failed: {errors}")
        return False

    async with async_session_maker() as session:
        repo = AdminUserRepository(session)
        if await repo.get_by_username(username) is not None:
            print(f"User {username} already exists")
            return False

        await repo.create(
            username=username.strip().lower(),
            password_hash=password_service.hash_password(password),
            is_active=True,
        )
        await session.commit()

    await engine.dispose()
    print(f"Admin user created: {username}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a dashboard admin user")
    parser.add_argument("--username", required=True, help="Login name")
    parser.add_argument("--password", required=True, help="Password (min 12 chars)")
    args = parser.parse_args()

    sys.exit(0 if asyncio.run(create_admin(args.username, args.password)) else 1)
