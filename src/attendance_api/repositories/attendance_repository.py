"""Attendance repository."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select, update

from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.repositories.base import BaseRepository


class AttendanceRepository(BaseRepository[AttendanceORM]):
    """Repository for attendance records."""

    model = AttendanceORM

    async def get_for_day(self, employee_id: UUID, day: date) -> AttendanceORM | None:
        """Get the attendance row of an employee on a day."""
        result = await self.session.execute(
            select(AttendanceORM).where(
                AttendanceORM.employee_id == employee_id,
                AttendanceORM.date == day,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_check_in(
        self,
        employee_id: UUID,
        day: date,
        check_in_time: datetime,
        **fields: Any,
    ) -> AttendanceORM | None:
        """Insert today's row with a check-in.

        Args:
            employee_id: Employee UUID
            day: Calendar date
            check_in_time: Check-in timestamp
            **fields: Work location and check-in reflection

        Returns:
            Created row, or None if a row already exists for the day
        """
        return await self.create_unique(
            employee_id=employee_id,
            date=day,
            check_in_time=check_in_time,
            **fields,
        )

    async def record_check_out(
        self,
        employee_id: UUID,
        day: date,
        check_out_time: datetime,
        **fields: Any,
    ) -> bool:
        """Set the check-out of a checked-in, not yet checked-out row.

        Args:
            employee_id: Employee UUID
            day: Calendar date
            check_out_time: Check-out timestamp
            **fields: Check-out reflection and rating

        Returns:
            True if a row was updated, False if no row matched
        """
        result = await self.session.execute(
            update(AttendanceORM)
            .where(
                AttendanceORM.employee_id == employee_id,
                AttendanceORM.date == day,
                AttendanceORM.check_in_time.is_not(None),
                AttendanceORM.check_out_time.is_(None),
            )
            .values(check_out_time=check_out_time, **fields)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def count_incomplete(self, employee_id: UUID, start: date, end: date) -> int:
        """Count rows in [start, end] missing a check-in or a check-out."""
        result = await self.session.execute(
            select(func.count(AttendanceORM.id)).where(
                AttendanceORM.employee_id == employee_id,
                AttendanceORM.date >= start,
                AttendanceORM.date <= end,
                or_(
                    AttendanceORM.check_in_time.is_(None),
                    AttendanceORM.check_out_time.is_(None),
                ),
            )
        )
        return result.scalar_one()

    async def get_history(self, employee_id: UUID, limit: int = 30) -> list[AttendanceORM]:
        """Get the latest rows of an employee, newest first."""
        result = await self.session.execute(
            select(AttendanceORM)
            .where(AttendanceORM.employee_id == employee_id)
            .order_by(AttendanceORM.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_between(
        self,
        start: date,
        end: date,
        employee_id: UUID | None = None,
    ) -> list[AttendanceORM]:
        """Get rows dated in [start, end], optionally for one employee."""
        query = select(AttendanceORM).where(
            AttendanceORM.date >= start,
            AttendanceORM.date <= end,
        )
        if employee_id is not None:
            query = query.where(AttendanceORM.employee_id == employee_id)
        result = await self.session.execute(query.order_by(AttendanceORM.date))
        return list(result.scalars().all())

    async def get_daily_stats(self, since: date) -> list[tuple[date, int, int, float | None]]:
        """Aggregate check-ins per day since a date, newest first.

        Returns:
            List of (date, checkins, checkouts, avg_rating) tuples
        """
        result = await self.session.execute(
            select(
                AttendanceORM.date,
                func.count(AttendanceORM.check_in_time),
                func.count(AttendanceORM.check_out_time),
                func.avg(AttendanceORM.overall_rating),
            )
            .where(AttendanceORM.date >= since)
            .group_by(AttendanceORM.date)
            .order_by(AttendanceORM.date.desc())
        )
        return [
            (row[0], row[1], row[2], float(row[3]) if row[3] is not None else None)
            for row in result.all()
        ]

    async def get_for_day_with_employees(self, day: date) -> list[tuple[AttendanceORM, EmployeeORM]]:
        """Get all rows of a day joined with their employees."""
        result = await self.session.execute(
            select(AttendanceORM, EmployeeORM)
            .join(EmployeeORM, EmployeeORM.id == AttendanceORM.employee_id)
            .where(AttendanceORM.date == day)
            .order_by(AttendanceORM.check_in_time)
        )
        return [(row[0], row[1]) for row in result.all()]
