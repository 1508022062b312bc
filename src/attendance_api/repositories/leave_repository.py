"""Leave repository."""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select

from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.repositories.base import BaseRepository


class LeaveRepository(BaseRepository[LeaveORM]):
    """Repository for leave records."""

    model = LeaveORM

    async def get_for_day(self, employee_id: UUID, day: date) -> LeaveORM | None:
        """Get the leave of an employee on a day."""
        result = await self.session.execute(
            select(LeaveORM).where(
                LeaveORM.employee_id == employee_id,
                LeaveORM.date == day,
            )
        )
        return result.scalar_one_or_none()

    async def create_leave(self, employee_id: UUID, day: date, description: str) -> LeaveORM | None:
        """Insert a leave day.

        Returns:
            Created row, or None if the employee already has leave that day
        """
        return await self.create_unique(employee_id=employee_id, date=day, description=description)

    async def count_between(self, employee_id: UUID, start: date, end: date) -> int:
        """Count an employee's leave days in [start, end]."""
        result = await self.session.execute(
            select(func.count(LeaveORM.id)).where(
                LeaveORM.employee_id == employee_id,
                LeaveORM.date >= start,
                LeaveORM.date <= end,
            )
        )
        return result.scalar_one()

    async def get_for_employee(self, employee_id: UUID, limit: int = 100) -> list[LeaveORM]:
        """Get an employee's leaves, newest first."""
        result = await self.session.execute(
            select(LeaveORM)
            .where(LeaveORM.employee_id == employee_id)
            .order_by(LeaveORM.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_between(
        self,
        start: date,
        end: date,
        employee_id: UUID | None = None,
    ) -> list[LeaveORM]:
        """Get leaves dated in [start, end], optionally for one employee."""
        query = select(LeaveORM).where(LeaveORM.date >= start, LeaveORM.date <= end)
        if employee_id is not None:
            query = query.where(LeaveORM.employee_id == employee_id)
        result = await self.session.execute(query.order_by(LeaveORM.date))
        return list(result.scalars().all())

    async def get_with_employees(self, day: date | None = None) -> list[tuple[LeaveORM, EmployeeORM]]:
        """Get leaves joined with their employees, newest first.

        Args:
            day: Only return leaves on this date

        Returns:
            List of (leave, employee) tuples
        """
        query = select(LeaveORM, EmployeeORM).join(
            EmployeeORM, EmployeeORM.id == LeaveORM.employee_id
        )
        if day is not None:
            query = query.where(LeaveORM.date == day)
        result = await self.session.execute(query.order_by(LeaveORM.date.desc()))
        return [(row[0], row[1]) for row in result.all()]
