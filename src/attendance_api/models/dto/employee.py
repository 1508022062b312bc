"""Employee DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from attendance_api.models.dto.attendance import AttendanceResponse
from attendance_api.models.dto.leave import LeaveBalanceResponse


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: UUID
    platform_id: str
    platform: str
    username: str
    display_name: str
    email: str | None = None
    department: str | None = None
    position: str | None = None
    is_active: bool
    created_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeSummaryResponse(EmployeeResponse):
    """Employee list entry with attendance totals."""

    total_attendance: int = 0
    last_checkin: datetime | None = None


class EmployeeStats(BaseModel):
    """Attendance statistics over the last 30 days."""

    period_start: date
    total_days: int = 0
    completed_days: int = 0
    avg_rating: float | None = None
    avg_hours: float | None = None


class EmployeeDetailResponse(BaseModel):
    """Employee detail with history, stats and leave balance."""

    employee: EmployeeResponse
    attendance_history: list[AttendanceResponse]
    stats: EmployeeStats
    leave_balance: LeaveBalanceResponse
