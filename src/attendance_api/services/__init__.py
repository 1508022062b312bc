"""Services package."""

from attendance_api.services.analytics_service import AnalyticsService
from attendance_api.services.auth_service import AuthService
from attendance_api.services.command_service import CommandService
from attendance_api.services.employee_service import EmployeeService
from attendance_api.services.holiday_service import HolidayService
from attendance_api.services.leave_service import LeaveService
from attendance_api.services.reminder_service import ReminderService
from attendance_api.services.settings_service import SettingsService

__all__ = [
    "AnalyticsService",
    "AuthService",
    "CommandService",
    "EmployeeService",
    "HolidayService",
    "LeaveService",
    "ReminderService",
    "SettingsService",
]
