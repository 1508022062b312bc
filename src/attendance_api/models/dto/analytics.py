"""Analytics DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from attendance_api.models.domain.attendance import DayState
from attendance_api.models.dto.leave import LeaveBalanceResponse


class DailyStats(BaseModel):
    """Check-in totals for one day."""

    date: date
    total_checkins: int
    total_checkouts: int
    avg_rating: float | None = None


class KpiBlock(BaseModel):
    """Attendance KPIs for one period."""

    period_start: date
    period_end: date
    checkins: int = 0
    checkouts: int = 0
    leaves: int = 0
    avg_rating: float | None = None
    avg_hours: float | None = None


class KpiResponse(BaseModel):
    """KPIs for today, the current month and the current year."""

    active_employees: int
    today: KpiBlock
    month: KpiBlock
    year: KpiBlock


class TodayRecord(BaseModel):
    """Today's attendance row with the employee and hours worked."""

    id: UUID
    employee_id: UUID
    username: str
    display_name: str
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    work_from: str | None = None
    current_status: str | None = None
    overall_rating: int | None = None
    hours_worked: float | None = None


class CheckinStatus(BaseModel):
    """State of one active employee today."""

    employee_id: UUID
    username: str
    display_name: str
    state: DayState
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    work_from: str | None = None
    leave_description: str | None = None


class EmployeeLeaveSummary(BaseModel):
    """Leave balance of one active employee."""

    employee_id: UUID
    username: str
    display_name: str
    leave_balance: LeaveBalanceResponse
