"""Project settings service."""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import InvalidSettingError
from attendance_api.models.dto.settings import ProjectSettingsResponse, ProjectSettingsUpdate
from attendance_api.repositories.settings_repository import SettingsRepository
from attendance_api.services.leave_calculator import (
    DEFAULT_ANNUAL_LEAVE_DAYS,
    DEFAULT_RESET_DATE,
    parse_reset_date,
)

logger = logging.getLogger(__name__)

PROJECT_START_DATE = "project_start_date"
ANNUAL_LEAVE_DAYS = "annual_leave_days"
ANNUAL_LEAVE_RESET_DATE = "annual_leave_reset_date"

SETTING_DESCRIPTIONS = {
    PROJECT_START_DATE: "Date before which no attendance is expected",
    ANNUAL_LEAVE_DAYS: "Annual leave allowance in days",
    ANNUAL_LEAVE_RESET_DATE: "Month and day (MM-DD) on which the leave year rolls over",
}


class LeavePolicy:
    """Leave allowance and reset date read from settings."""

    def __init__(self, allowance: int, reset_month: int, reset_day: int) -> None:
        self.allowance = allowance
        self.reset_month = reset_month
        self.reset_day = reset_day

    @property
    def reset_date(self) -> str:
        """Reset date in MM-DD form."""
        return f"{self.reset_month:02d}-{self.reset_day:02d}"


class SettingsService:
    """Service for reading and updating project settings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.settings_repo = SettingsRepository(session)

    async def get_leave_policy(self) -> LeavePolicy:
        """Get the leave policy, falling back to defaults.

        Missing or unreadable stored values degrade to 14 days and ``07-16``
        instead of failing, since leave tracking is secondary to attendance.

        Returns:
            LeavePolicy
        """
        values = await self.settings_repo.get_all()

        allowance = DEFAULT_ANNUAL_LEAVE_DAYS
        raw_allowance = values.get(ANNUAL_LEAVE_DAYS)
        if raw_allowance is not None:
            try:
                allowance = int(raw_allowance)
            except ValueError:
                logger.warning("Ignoring invalid %s setting: %r", ANNUAL_LEAVE_DAYS, raw_allowance)

        month, day = parse_reset_date(DEFAULT_RESET_DATE)
        raw_reset = values.get(ANNUAL_LEAVE_RESET_DATE)
        if raw_reset is not None:
            try:
                month, day = parse_reset_date(raw_reset)
            except ValueError:
                logger.warning("Ignoring invalid %s setting: %r", ANNUAL_LEAVE_RESET_DATE, raw_reset)

        return LeavePolicy(allowance, month, day)

    async def get_project_start_date(self) -> date | None:
        """Get the project start date, or None if unset or unreadable."""
        raw = await self.settings_repo.get(PROJECT_START_DATE)
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            logger.warning("Ignoring invalid %s setting: %r", PROJECT_START_DATE, raw)
            return None

    async def get_project_settings(self) -> ProjectSettingsResponse:
        """Get all project settings with defaults applied."""
        policy = await self.get_leave_policy()
        return ProjectSettingsResponse(
            project_start_date=await self.get_project_start_date(),
            annual_leave_days=policy.allowance,
            annual_leave_reset_date=policy.reset_date,
        )

    async def update_project_settings(self, data: ProjectSettingsUpdate) -> ProjectSettingsResponse:
        """Validate and store project settings.

        Args:
            data: Fields to update; None leaves a setting unchanged

        Returns:
            Updated settings

        Raises:
            InvalidSettingError: If the reset date is malformed
        """
        if data.annual_leave_reset_date is not None:
            try:
                parse_reset_date(data.annual_leave_reset_date)
            except ValueError as e:
                raise InvalidSettingError(ANNUAL_LEAVE_RESET_DATE, str(e)) from e
            await self.settings_repo.set(
                ANNUAL_LEAVE_RESET_DATE,
                data.annual_leave_reset_date,
                SETTING_DESCRIPTIONS[ANNUAL_LEAVE_RESET_DATE],
            )

        if data.annual_leave_days is not None:
            await self.settings_repo.set(
                ANNUAL_LEAVE_DAYS,
                str(data.annual_leave_days),
                SETTING_DESCRIPTIONS[ANNUAL_LEAVE_DAYS],
            )

        if data.project_start_date is not None:
            await self.settings_repo.set(
                PROJECT_START_DATE,
                data.project_start_date.isoformat(),
                SETTING_DESCRIPTIONS[PROJECT_START_DATE],
            )

        return await self.get_project_settings()
