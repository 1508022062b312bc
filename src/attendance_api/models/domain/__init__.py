"""Domain models package."""

from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.domain.attendance import (
    ContributionLevel,
    DayState,
    Mood,
    Platform,
    WorkLocation,
)

__all__ = [
    "AdminUser",
    "ContributionLevel",
    "DayState",
    "Mood",
    "Platform",
    "WorkLocation",
]
