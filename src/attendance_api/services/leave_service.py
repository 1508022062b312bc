"""Leave service: leave listings and leave-year balances."""

from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import EmployeeNotFoundError
from attendance_api.models.dto.leave import (
    EmployeeLeavesResponse,
    LeaveBalanceResponse,
    LeaveResponse,
    LeaveWithEmployeeResponse,
)
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.repositories.attendance_repository import AttendanceRepository
from attendance_api.repositories.employee_repository import EmployeeRepository
from attendance_api.repositories.leave_repository import LeaveRepository
from attendance_api.services.leave_calculator import (
    LeaveBalance,
    compute_balance,
    leave_year_window,
)
from attendance_api.services.settings_service import LeavePolicy, SettingsService
from attendance_api.utils.dates import local_today


def _with_employee(leave: LeaveORM, employee: EmployeeORM) -> LeaveWithEmployeeResponse:
    return LeaveWithEmployeeResponse(
        id=leave.id,
        employee_id=leave.employee_id,
        date=leave.date,
        description=leave.description,
        created_at=leave.created_at,
        username=employee.username,
        display_name=employee.display_name,
    )


class LeaveService:
    """Service for leave records and balances."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.leave_repo = LeaveRepository(session)
        self.attendance_repo = AttendanceRepository(session)
        self.employee_repo = EmployeeRepository(session)
        self.settings_service = SettingsService(session)

    async def calculate_balance(
        self,
        employee_id: UUID,
        today: date | None = None,
        policy: LeavePolicy | None = None,
    ) -> LeaveBalance:
        """Compute an employee's leave usage in the current leave year.

        Leave days and attendance days missing a check-in or check-out both
        consume the allowance.

        Args:
            employee_id: Employee UUID
            today: Calendar date to evaluate (defaults to local today)
            policy: Pre-loaded leave policy, to avoid re-reading settings

        Returns:
            LeaveBalance for the leave year containing ``today``
        """
        today = today or local_today()
        policy = policy or await self.settings_service.get_leave_policy()
        window = leave_year_window(today, policy.reset_month, policy.reset_day)

        taken = await self.leave_repo.count_between(employee_id, window.start, window.end)
        incomplete = await self.attendance_repo.count_incomplete(employee_id, window.start, window.end)
        return compute_balance(policy.allowance, taken, incomplete, window)

    async def get_balance(self, employee_id: UUID, today: date | None = None) -> LeaveBalanceResponse:
        """Get the leave balance of a known employee.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if await self.employee_repo.get(employee_id) is None:
            raise EmployeeNotFoundError(str(employee_id))
        balance = await self.calculate_balance(employee_id, today)
        return LeaveBalanceResponse.model_validate(balance)

    async def list_leaves(self) -> list[LeaveWithEmployeeResponse]:
        """List all leaves with employee names, newest first."""
        rows = await self.leave_repo.get_with_employees()
        return [_with_employee(leave, employee) for leave, employee in rows]

    async def list_leaves_on(self, day: date) -> list[LeaveWithEmployeeResponse]:
        """List the leaves taken on one date."""
        rows = await self.leave_repo.get_with_employees(day)
        return [_with_employee(leave, employee) for leave, employee in rows]

    async def get_employee_leaves(
        self,
        employee_id: UUID,
        today: date | None = None,
    ) -> EmployeeLeavesResponse:
        """Get an employee's leaves together with the balance.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        balance = await self.get_balance(employee_id, today)
        leaves = await self.leave_repo.get_for_employee(employee_id)
        return EmployeeLeavesResponse(
            leaves=[LeaveResponse.model_validate(leave) for leave in leaves],
            leave_balance=balance,
        )
