"""Employee repository."""

from datetime import datetime

from sqlalchemy import func, select

from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_platform_id(self, platform_id: str) -> EmployeeORM | None:
        """Get employee by chat platform user id.

        Args:
            platform_id: Slack user id or Discord user snowflake

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.platform_id == platform_id)
        )
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        platform_id: str,
        platform: str,
        username: str,
        display_name: str,
    ) -> EmployeeORM:
        """Get an employee by platform id, creating the row on first contact.

        A concurrent insert for the same platform id loses on the unique
        constraint and falls back to reading the winner's row.

        Args:
            platform_id: Chat platform user id
            platform: Platform name
            username: Chat username
            display_name: Chat display name

        Returns:
            Existing or newly created EmployeeORM
        """
        employee = await self.get_by_platform_id(platform_id)
        if employee is not None:
            return employee

        employee = await self.create_unique(
            platform_id=platform_id,
            platform=platform,
            username=username,
            display_name=display_name or username,
        )
        if employee is None:
            employee = await self.get_by_platform_id(platform_id)
        return employee

    async def get_active(self) -> list[EmployeeORM]:
        """Get all active employees ordered by username."""
        result = await self.session.execute(
            select(EmployeeORM)
            .where(EmployeeORM.is_active.is_(True))
            .order_by(EmployeeORM.username)
        )
        return list(result.scalars().all())

    async def get_active_with_totals(self) -> list[tuple[EmployeeORM, int, datetime | None]]:
        """Get active employees with attendance count and last check-in.

        Returns:
            List of (employee, total_attendance, last_checkin) tuples
        """
        result = await self.session.execute(
            select(
                EmployeeORM,
                func.count(AttendanceORM.id),
                func.max(AttendanceORM.check_in_time),
            )
            .outerjoin(AttendanceORM, AttendanceORM.employee_id == EmployeeORM.id)
            .where(EmployeeORM.is_active.is_(True))
            .group_by(EmployeeORM.id)
            .order_by(EmployeeORM.username)
        )
        return [(row[0], row[1], row[2]) for row in result.all()]
