"""API routers package."""

from attendance_api.routers import (
    analytics,
    attendance,
    auth,
    discord_bot,
    employees,
    holidays,
    leaves,
    settings,
    slack_bot,
)

__all__ = [
    "analytics",
    "attendance",
    "auth",
    "discord_bot",
    "employees",
    "holidays",
    "leaves",
    "settings",
    "slack_bot",
]
