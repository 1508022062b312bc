"""Repositories package."""

from attendance_api.repositories.admin_user_repository import AdminUserRepository
from attendance_api.repositories.attendance_repository import AttendanceRepository
from attendance_api.repositories.base import BaseRepository
from attendance_api.repositories.employee_repository import EmployeeRepository
from attendance_api.repositories.holiday_repository import HolidayRepository
from attendance_api.repositories.leave_repository import LeaveRepository
from attendance_api.repositories.settings_repository import SettingsRepository

__all__ = [
    "BaseRepository",
    "AdminUserRepository",
    "AttendanceRepository",
    "EmployeeRepository",
    "HolidayRepository",
    "LeaveRepository",
    "SettingsRepository",
]
