"""Attendance DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from attendance_api.models.domain.attendance import ContributionLevel
from attendance_api.models.dto.holiday import HolidayResponse


class AttendanceResponse(BaseModel):
    """Attendance record response DTO."""

    id: UUID
    employee_id: UUID
    date: date
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    work_from: str | None = None
    today_plan: str | None = None
    yesterday_task: str | None = None
    current_status: str | None = None
    accomplishments: str | None = None
    blockers: str | None = None
    tomorrow_priorities: str | None = None
    overall_rating: int | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True


class MatrixEmployee(BaseModel):
    """One matrix row: an employee and the level of every day of the year."""

    id: UUID
    username: str
    display_name: str
    days: dict[date, ContributionLevel]


class MatrixResponse(BaseModel):
    """Contribution matrix for one calendar year."""

    year: int
    project_start_date: date | None = None
    holidays: list[HolidayResponse]
    employees: list[MatrixEmployee]
