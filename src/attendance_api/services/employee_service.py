"""Employee service for the dashboard."""

from collections.abc import Sequence
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import EmployeeNotFoundError
from attendance_api.models.dto.attendance import AttendanceResponse
from attendance_api.models.dto.employee import (
    EmployeeDetailResponse,
    EmployeeResponse,
    EmployeeStats,
    EmployeeSummaryResponse,
)
from attendance_api.models.dto.leave import LeaveBalanceResponse
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.repositories.attendance_repository import AttendanceRepository
from attendance_api.repositories.employee_repository import EmployeeRepository
from attendance_api.services.leave_service import LeaveService
from attendance_api.utils.dates import hours_between, local_today

STATS_PERIOD_DAYS = 30
HISTORY_LIMIT = 30


def summarize_attendance(rows: Sequence[AttendanceORM], period_start: date) -> EmployeeStats:
    """Summarize attendance rows into 30-day stats.

    Only rows with a check-in count as days worked.

    Args:
        rows: Attendance rows of one employee
        period_start: First day of the period

    Returns:
        EmployeeStats
    """
    worked = [row for row in rows if row.check_in_time is not None]
    ratings = [row.overall_rating for row in worked if row.overall_rating is not None]
    hours = [
        h for h in (hours_between(row.check_in_time, row.check_out_time) for row in worked)
        if h is not None
    ]
    return EmployeeStats(
        period_start=period_start,
        total_days=len(worked),
        completed_days=sum(1 for row in worked if row.check_out_time is not None),
        avg_rating=round(sum(ratings) / len(ratings), 2) if ratings else None,
        avg_hours=round(sum(hours) / len(hours), 2) if hours else None,
    )


class EmployeeService:
    """Service for employee listings and details."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.attendance_repo = AttendanceRepository(session)
        self.leave_service = LeaveService(session)

    async def list_employees(self) -> list[EmployeeSummaryResponse]:
        """List active employees with attendance totals."""
        rows = await self.employee_repo.get_active_with_totals()
        return [
            EmployeeSummaryResponse(
                **EmployeeResponse.model_validate(employee).model_dump(),
                total_attendance=total,
                last_checkin=last_checkin,
            )
            for employee, total, last_checkin in rows
        ]

    async def get_stats(self, employee_id: UUID, today: date | None = None) -> EmployeeStats:
        """Get attendance stats of the last 30 days, today included."""
        today = today or local_today()
        period_start = today - timedelta(days=STATS_PERIOD_DAYS - 1)
        rows = await self.attendance_repo.get_between(period_start, today, employee_id)
        return summarize_attendance(rows, period_start)

    async def get_employee_detail(
        self,
        employee_id: UUID,
        today: date | None = None,
    ) -> EmployeeDetailResponse:
        """Get an employee with recent history, stats and leave balance.

        Args:
            employee_id: Employee UUID
            today: Calendar date to evaluate (defaults to local today)

        Returns:
            EmployeeDetailResponse

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.employee_repo.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))

        history = await self.attendance_repo.get_history(employee_id, HISTORY_LIMIT)
        balance = await self.leave_service.calculate_balance(employee_id, today)

        return EmployeeDetailResponse(
            employee=EmployeeResponse.model_validate(employee),
            attendance_history=[AttendanceResponse.model_validate(row) for row in history],
            stats=await self.get_stats(employee_id, today),
            leave_balance=LeaveBalanceResponse.model_validate(balance),
        )
