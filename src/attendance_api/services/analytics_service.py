"""Dashboard analytics and the contribution matrix."""

from collections.abc import Sequence
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import EmployeeNotFoundError
from attendance_api.models.dto.analytics import (
    CheckinStatus,
    DailyStats,
    EmployeeLeaveSummary,
    KpiBlock,
    KpiResponse,
    TodayRecord,
)
from attendance_api.models.dto.attendance import MatrixEmployee, MatrixResponse
from attendance_api.models.dto.holiday import HolidayResponse
from attendance_api.models.dto.leave import LeaveBalanceResponse
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.repositories.attendance_repository import AttendanceRepository
from attendance_api.repositories.employee_repository import EmployeeRepository
from attendance_api.repositories.holiday_repository import HolidayRepository
from attendance_api.repositories.leave_repository import LeaveRepository
from attendance_api.services.command_service import day_state
from attendance_api.services.contribution import classify_day
from attendance_api.services.leave_service import LeaveService
from attendance_api.services.settings_service import SettingsService
from attendance_api.utils.dates import hours_between, local_today

STATS_PERIOD_DAYS = 30


def _average(values: Sequence[float]) -> float | None:
    return round(sum(values) / len(values), 2) if values else None


def build_kpi_block(
    start: date,
    end: date,
    attendance: Sequence[AttendanceORM],
    leaves: Sequence[LeaveORM],
) -> KpiBlock:
    """Aggregate attendance and leave rows of a period into KPIs."""
    ratings = [row.overall_rating for row in attendance if row.overall_rating is not None]
    hours = [
        h for h in (hours_between(row.check_in_time, row.check_out_time) for row in attendance)
        if h is not None
    ]
    return KpiBlock(
        period_start=start,
        period_end=end,
        checkins=sum(1 for row in attendance if row.check_in_time is not None),
        checkouts=sum(1 for row in attendance if row.check_out_time is not None),
        leaves=len(leaves),
        avg_rating=_average(ratings),
        avg_hours=_average(hours),
    )


class AnalyticsService:
    """Service for dashboard aggregates."""

    def __init__(self, session: AsyncSession, today: date | None = None) -> None:
        """Initialize service.

        Args:
            session: Database session
            today: Calendar date to evaluate (defaults to local today)
        """
        self.session = session
        self.today = today or local_today()
        self.attendance_repo = AttendanceRepository(session)
        self.employee_repo = EmployeeRepository(session)
        self.holiday_repo = HolidayRepository(session)
        self.leave_repo = LeaveRepository(session)
        self.leave_service = LeaveService(session)
        self.settings_service = SettingsService(session)

    async def get_daily_stats(self) -> list[DailyStats]:
        """Check-ins, check-outs and average rating per day over 30 days."""
        since = self.today - timedelta(days=STATS_PERIOD_DAYS - 1)
        rows = await self.attendance_repo.get_daily_stats(since)
        return [
            DailyStats(
                date=day,
                total_checkins=checkins,
                total_checkouts=checkouts,
                avg_rating=round(avg_rating, 2) if avg_rating is not None else None,
            )
            for day, checkins, checkouts, avg_rating in rows
        ]

    async def _kpis_between(self, start: date, end: date) -> KpiBlock:
        attendance = await self.attendance_repo.get_between(start, end)
        leaves = await self.leave_repo.get_between(start, end)
        return build_kpi_block(start, end, attendance, leaves)

    async def get_kpis(self) -> KpiResponse:
        """KPI blocks for today, month to date and year to date."""
        month_start = self.today.replace(day=1)
        year_start = self.today.replace(month=1, day=1)
        return KpiResponse(
            active_employees=len(await self.employee_repo.get_active()),
            today=await self._kpis_between(self.today, self.today),
            month=await self._kpis_between(month_start, self.today),
            year=await self._kpis_between(year_start, self.today),
        )

    async def get_today_records(self) -> list[TodayRecord]:
        """Today's attendance rows with employee names and hours worked."""
        rows = await self.attendance_repo.get_for_day_with_employees(self.today)
        return [
            TodayRecord(
                id=record.id,
                employee_id=employee.id,
                username=employee.username,
                display_name=employee.display_name,
                check_in_time=record.check_in_time,
                check_out_time=record.check_out_time,
                work_from=record.work_from,
                current_status=record.current_status,
                overall_rating=record.overall_rating,
                hours_worked=hours_between(record.check_in_time, record.check_out_time),
            )
            for record, employee in rows
        ]

    async def get_checkin_status(self) -> list[CheckinStatus]:
        """Today's state of every active employee."""
        employees = await self.employee_repo.get_active()
        attendance = {
            row.employee_id: row
            for row in await self.attendance_repo.get_between(self.today, self.today)
        }
        leaves = {
            row.employee_id: row
            for row in await self.leave_repo.get_between(self.today, self.today)
        }

        statuses = []
        for employee in employees:
            record = attendance.get(employee.id)
            leave = leaves.get(employee.id)
            statuses.append(
                CheckinStatus(
                    employee_id=employee.id,
                    username=employee.username,
                    display_name=employee.display_name,
                    state=day_state(record, leave),
                    check_in_time=record.check_in_time if record else None,
                    check_out_time=record.check_out_time if record else None,
                    work_from=record.work_from if record else None,
                    leave_description=leave.description if leave else None,
                )
            )
        return statuses

    async def get_employee_leave_summary(self) -> list[EmployeeLeaveSummary]:
        """Leave balance of every active employee."""
        policy = await self.settings_service.get_leave_policy()
        summaries = []
        for employee in await self.employee_repo.get_active():
            balance = await self.leave_service.calculate_balance(employee.id, self.today, policy)
            summaries.append(
                EmployeeLeaveSummary(
                    employee_id=employee.id,
                    username=employee.username,
                    display_name=employee.display_name,
                    leave_balance=LeaveBalanceResponse.model_validate(balance),
                )
            )
        return summaries

    async def get_matrix(self, year: int, employee_id: UUID | None = None) -> MatrixResponse:
        """Contribution level of every employee for every day of a year.

        Args:
            year: Calendar year
            employee_id: Restrict the matrix to one employee

        Returns:
            MatrixResponse

        Raises:
            EmployeeNotFoundError: If ``employee_id`` is unknown
        """
        start = date(year, 1, 1)
        end = date(year, 12, 31)

        if employee_id is not None:
            employee = await self.employee_repo.get(employee_id)
            if employee is None:
                raise EmployeeNotFoundError(str(employee_id))
            employees = [employee]
        else:
            employees = await self.employee_repo.get_active()

        project_start = await self.settings_service.get_project_start_date()
        holidays = await self.holiday_repo.get_between(start, end)
        holiday_dates = {h.date for h in holidays}

        attendance = {
            (row.employee_id, row.date): row
            for row in await self.attendance_repo.get_between(start, end, employee_id)
        }
        leave_days = {
            (row.employee_id, row.date)
            for row in await self.leave_repo.get_between(start, end, employee_id)
        }

        days = [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
        rows = []
        for employee in employees:
            levels = {}
            for day in days:
                record = attendance.get((employee.id, day))
                levels[day] = classify_day(
                    day,
                    self.today,
                    project_start,
                    holiday_dates,
                    on_leave=(employee.id, day) in leave_days,
                    check_in_time=record.check_in_time if record else None,
                    check_out_time=record.check_out_time if record else None,
                    rating=record.overall_rating if record else None,
                    has_record=record is not None,
                )
            rows.append(
                MatrixEmployee(
                    id=employee.id,
                    username=employee.username,
                    display_name=employee.display_name,
                    days=levels,
                )
            )

        return MatrixResponse(
            year=year,
            project_start_date=project_start,
            holidays=[HolidayResponse.model_validate(h) for h in holidays],
            employees=rows,
        )
