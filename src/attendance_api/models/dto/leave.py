"""Leave DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel


class LeaveResponse(BaseModel):
    """Leave record response DTO."""

    id: UUID
    employee_id: UUID
    date: date
    description: str
    created_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class LeaveWithEmployeeResponse(LeaveResponse):
    """Leave record with the employee's names."""

    username: str
    display_name: str


class LeaveBalanceResponse(BaseModel):
    """Leave usage in the current leave year."""

    allowance: int
    taken_leaves: int
    no_check_in_out_days: int
    total_used: int
    remaining: int
    year_start_date: date
    year_end_date: date

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeLeavesResponse(BaseModel):
    """Leaves of one employee plus the balance."""

    leaves: list[LeaveResponse]
    leave_balance: LeaveBalanceResponse
