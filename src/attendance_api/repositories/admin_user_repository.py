"""Admin user repository."""

from datetime import datetime

from sqlalchemy import select

from attendance_api.models.orm.admin_user import AdminUserORM
from attendance_api.repositories.base import BaseRepository


class AdminUserRepository(BaseRepository[AdminUserORM]):
    """Repository for dashboard administrators."""

    model = AdminUserORM

    async def get_by_username(self, username: str) -> AdminUserORM | None:
        """Get admin user by username (case-insensitive)."""
        result = await self.session.execute(
            select(AdminUserORM).where(AdminUserORM.username == username.strip().lower())
        )
        return result.scalar_one_or_none()

    async def record_login(self, user: AdminUserORM, when: datetime) -> None:
        """Store the time of a successful login."""
        user.last_login_at = when
        await self.session.flush()
