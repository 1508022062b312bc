"""Platform-neutral handlers for the chat bot commands.

Each employee moves through one of two paths per calendar day:
no record -> checked in -> completed, or no record -> on leave. Existence
checks (``ensure_can_*``) let the bots fail fast before opening a modal; the
writes themselves rely on unique constraints and conditional updates, so a
duplicate submission is rejected even if it slips past the checks.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    EmployeeNotRegisteredError,
    InvalidRatingError,
    LeaveAfterAttendanceError,
    LeaveAlreadyAppliedError,
    NotCheckedInError,
    OnLeaveError,
)
from attendance_api.models.domain.attendance import DayState, WorkLocation
from attendance_api.models.dto.employee import EmployeeStats
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.repositories.attendance_repository import AttendanceRepository
from attendance_api.repositories.employee_repository import EmployeeRepository
from attendance_api.repositories.leave_repository import LeaveRepository
from attendance_api.services.employee_service import EmployeeService
from attendance_api.services.leave_calculator import LeaveBalance
from attendance_api.services.leave_service import LeaveService
from attendance_api.utils.dates import local_today, utc_now

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
NO_BLOCKERS = "None"


@dataclass
class ChatUser:
    """Identity of the chat user issuing a command."""

    platform_id: str
    platform: str
    username: str
    display_name: str


@dataclass
class StatusReport:
    """Answer to the status command."""

    state: DayState
    attendance: AttendanceORM | None = None
    leave: LeaveORM | None = None
    stats: EmployeeStats | None = None
    balance: LeaveBalance | None = None


def parse_rating(value: str | int | None) -> int:
    """Parse a day rating entered in a chat form.

    Raises:
        InvalidRatingError: If the value is not an integer in [1, 5]
    """
    try:
        rating = int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise InvalidRatingError() from e
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError()
    return rating


def day_state(attendance: AttendanceORM | None, leave: LeaveORM | None) -> DayState:
    """Derive the command state of one employee-day."""
    if leave is not None:
        return DayState.ON_LEAVE
    if attendance is None or attendance.check_in_time is None:
        return DayState.NO_RECORD
    if attendance.check_out_time is None:
        return DayState.CHECKED_IN
    return DayState.COMPLETED


class CommandService:
    """Check-in, check-out, leave and status operations for one calendar day."""

    def __init__(
        self,
        session: AsyncSession,
        today: date | None = None,
        now: datetime | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session: Database session
            today: Calendar date of the command (defaults to local today)
            now: Timestamp recorded for check-in/out (defaults to UTC now)
        """
        self.session = session
        self.today = today or local_today()
        self.now = now
        self.employee_repo = EmployeeRepository(session)
        self.attendance_repo = AttendanceRepository(session)
        self.leave_repo = LeaveRepository(session)

    def _timestamp(self) -> datetime:
        return self.now or utc_now()

    async def _register(self, user: ChatUser) -> EmployeeORM:
        return await self.employee_repo.get_or_create(
            platform_id=user.platform_id,
            platform=user.platform,
            username=user.username,
            display_name=user.display_name,
        )

    async def ensure_can_check_in(self, user: ChatUser) -> None:
        """Reject a check-in before the wizard starts.

        Raises:
            OnLeaveError: If the employee is on leave today
            AlreadyCheckedInError: If the employee already checked in today
        """
        employee = await self.employee_repo.get_by_platform_id(user.platform_id)
        if employee is None:
            return
        if await self.leave_repo.get_for_day(employee.id, self.today) is not None:
            raise OnLeaveError("check in")
        attendance = await self.attendance_repo.get_for_day(employee.id, self.today)
        if attendance is not None and attendance.check_in_time is not None:
            raise AlreadyCheckedInError()

    async def check_in(
        self,
        user: ChatUser,
        work_from: WorkLocation | str,
        current_status: str,
        today_plan: str,
        yesterday_task: str,
    ) -> AttendanceORM:
        """Record today's check-in, registering the employee on first use.

        Args:
            user: Chat user
            work_from: Work location
            current_status: Mood picked in the wizard
            today_plan: Plan for today
            yesterday_task: What was done yesterday

        Returns:
            Created attendance row

        Raises:
            OnLeaveError: If the employee is on leave today
            AlreadyCheckedInError: If a row already exists for today
        """
        employee = await self._register(user)
        if await self.leave_repo.get_for_day(employee.id, self.today) is not None:
            raise OnLeaveError("check in")

        record = await self.attendance_repo.create_check_in(
            employee.id,
            self.today,
            self._timestamp(),
            work_from=WorkLocation(work_from).value,
            current_status=current_status,
            today_plan=today_plan,
            yesterday_task=yesterday_task,
        )
        if record is None:
            raise AlreadyCheckedInError()

        logger.info("Employee %s checked in for %s", employee.id, self.today)
        return record

    async def _ensure_checked_in(self, employee: EmployeeORM | None) -> EmployeeORM:
        if employee is None:
            raise EmployeeNotRegisteredError()
        if await self.leave_repo.get_for_day(employee.id, self.today) is not None:
            raise OnLeaveError("check out")
        attendance = await self.attendance_repo.get_for_day(employee.id, self.today)
        if attendance is None or attendance.check_in_time is None:
            raise NotCheckedInError()
        if attendance.check_out_time is not None:
            raise AlreadyCheckedOutError()
        return employee

    async def ensure_can_check_out(self, user: ChatUser) -> None:
        """Reject a check-out before the modal opens.

        Raises:
            EmployeeNotRegisteredError: If the user never checked in
            OnLeaveError: If the employee is on leave today
            NotCheckedInError: If there is no check-in today
            AlreadyCheckedOutError: If the employee already checked out
        """
        employee = await self.employee_repo.get_by_platform_id(user.platform_id)
        await self._ensure_checked_in(employee)

    async def check_out(
        self,
        user: ChatUser,
        accomplishments: str,
        blockers: str | None,
        tomorrow_priorities: str,
        rating: str | int,
    ) -> AttendanceORM:
        """Record today's check-out.

        Blank blockers are stored as the text ``"None"``.

        Args:
            user: Chat user
            accomplishments: What was accomplished today
            blockers: Blockers, may be blank
            tomorrow_priorities: Priorities for tomorrow
            rating: Day rating, 1 to 5

        Returns:
            Updated attendance row

        Raises:
            InvalidRatingError: If the rating is not an integer in [1, 5]
            EmployeeNotRegisteredError: If the user never checked in
            OnLeaveError: If the employee is on leave today
            NotCheckedInError: If there is no check-in today
            AlreadyCheckedOutError: If the employee already checked out
        """
        overall_rating = parse_rating(rating)

        employee = await self.employee_repo.get_by_platform_id(user.platform_id)
        if employee is None:
            raise EmployeeNotRegisteredError(user.platform_id)
        if await self.leave_repo.get_for_day(employee.id, self.today) is not None:
            raise OnLeaveError("check out")

        updated = await self.attendance_repo.record_check_out(
            employee.id,
            self.today,
            self._timestamp(),
            accomplishments=accomplishments,
            blockers=(blockers or "").strip() or NO_BLOCKERS,
            tomorrow_priorities=tomorrow_priorities,
            overall_rating=overall_rating,
        )
        if not updated:
            # Explain why the conditional update matched nothing
            await self._ensure_checked_in(employee)
            raise AlreadyCheckedOutError()

        logger.info("Employee %s checked out for %s", employee.id, self.today)
        return await self.attendance_repo.get_for_day(employee.id, self.today)

    async def ensure_can_apply_leave(self, user: ChatUser) -> None:
        """Reject a leave application before the modal opens.

        Raises:
            LeaveAlreadyAppliedError: If leave was already applied today
            LeaveAfterAttendanceError: If the employee checked in or out today
        """
        employee = await self.employee_repo.get_by_platform_id(user.platform_id)
        if employee is None:
            return
        if await self.leave_repo.get_for_day(employee.id, self.today) is not None:
            raise LeaveAlreadyAppliedError()
        await self._ensure_no_attendance(employee)

    async def _ensure_no_attendance(self, employee: EmployeeORM) -> None:
        attendance = await self.attendance_repo.get_for_day(employee.id, self.today)
        if attendance is not None and (
            attendance.check_in_time is not None or attendance.check_out_time is not None
        ):
            raise LeaveAfterAttendanceError()

    async def apply_leave(self, user: ChatUser, description: str) -> LeaveORM:
        """Record a leave day for today, registering the employee on first use.

        Args:
            user: Chat user
            description: Reason for the leave

        Returns:
            Created leave row

        Raises:
            LeaveAfterAttendanceError: If the employee checked in or out today
            LeaveAlreadyAppliedError: If leave was already applied today
        """
        employee = await self._register(user)
        await self._ensure_no_attendance(employee)

        leave = await self.leave_repo.create_leave(employee.id, self.today, description.strip())
        if leave is None:
            raise LeaveAlreadyAppliedError()

        logger.info("Employee %s applied for leave on %s", employee.id, self.today)
        return leave

    async def status(self, user: ChatUser) -> StatusReport:
        """Get today's state plus 30-day stats and leave balance."""
        employee = await self.employee_repo.get_by_platform_id(user.platform_id)
        if employee is None:
            return StatusReport(state=DayState.NO_RECORD)

        attendance = await self.attendance_repo.get_for_day(employee.id, self.today)
        leave = await self.leave_repo.get_for_day(employee.id, self.today)
        stats = await EmployeeService(self.session).get_stats(employee.id, self.today)
        balance = await LeaveService(self.session).calculate_balance(employee.id, self.today)

        return StatusReport(
            state=day_state(attendance, leave),
            attendance=attendance,
            leave=leave,
            stats=stats,
            balance=balance,
        )
