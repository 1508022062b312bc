"""Domain-specific exceptions for the attendance API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers. Bot adapters show
``message`` to the chat user verbatim, so messages are written for people.
"""

from typing import Any


class AttendanceAPIError(Exception):
    """Base exception for all attendance API errors."""

    status_code = 400

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(AttendanceAPIError):
    """Base class for resource not found errors."""

    status_code = 404


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: str | None = None) -> None:
        message = "Employee not found"
        details = {"employee_id": str(employee_id)} if employee_id else {}
        super().__init__(message, details)


class HolidayNotFoundError(NotFoundError):
    """Raised when a holiday cannot be found."""

    def __init__(self, holiday_id: str | None = None) -> None:
        message = "Holiday not found"
        details = {"holiday_id": str(holiday_id)} if holiday_id else {}
        super().__init__(message, details)


class EmployeeNotRegisteredError(NotFoundError):
    """Raised when a chat user has no employee row yet."""

    def __init__(self, platform_id: str | None = None) -> None:
        message = "❌ Please check in first before checking out."
        details = {"platform_id": platform_id} if platform_id else {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(AttendanceAPIError):
    """Base class for resource conflict errors."""

    status_code = 409


class AlreadyCheckedInError(ConflictError):
    """Raised when an employee checks in twice on the same day."""

    def __init__(self) -> None:
        super().__init__("❌ You have already checked in today.")


class AlreadyCheckedOutError(ConflictError):
    """Raised when an employee checks out twice on the same day."""

    def __init__(self) -> None:
        super().__init__("❌ You have already checked out today.")


class NotCheckedInError(ConflictError):
    """Raised when checking out without a check-in for today."""

    def __init__(self) -> None:
        super().__init__("❌ You haven't checked in today. Please check in first.")


class OnLeaveError(ConflictError):
    """Raised when an employee on leave tries to check in or out."""

    def __init__(self, action: str = "check in") -> None:
        super().__init__(f"❌ You are on leave today. You cannot {action}.", {"action": action})


class LeaveAlreadyAppliedError(ConflictError):
    """Raised when a second leave is applied for the same day."""

    def __init__(self) -> None:
        super().__init__("❌ You have already applied for leave today.")


class LeaveAfterAttendanceError(ConflictError):
    """Raised when leave is applied after checking in or out."""

    def __init__(self) -> None:
        super().__init__("❌ You cannot apply for leave after checking in or out today.")


class HolidayAlreadyExistsError(ConflictError):
    """Raised when a holiday already exists on the given date."""

    def __init__(self, date: str | None = None) -> None:
        message = "A holiday already exists on this date"
        details = {"date": date} if date else {}
        super().__init__(message, details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(AttendanceAPIError):
    """Base class for validation errors."""

    status_code = 400


class InvalidRatingError(ValidationError):
    """Raised when a check-out rating is outside 1..5."""

    def __init__(self) -> None:
        super().__init__("❌ Please provide a valid rating between 1 and 5.")


class WizardExpiredError(ValidationError):
    """Raised when the check-in wizard state is missing or incomplete."""

    def __init__(self) -> None:
        super().__init__("❌ Missing status or work location. Please start over with /checkin.")


class InvalidSettingError(ValidationError):
    """Raised when a project setting value fails validation."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid value for {key}: {reason}", {"key": key})
