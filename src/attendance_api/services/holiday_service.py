"""Holiday service."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import HolidayAlreadyExistsError, HolidayNotFoundError
from attendance_api.models.dto.holiday import HolidayCreate, HolidayResponse
from attendance_api.repositories.holiday_repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    """Service for company holidays."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.holiday_repo = HolidayRepository(session)

    async def list_holidays(self) -> list[HolidayResponse]:
        """List all holidays, latest first."""
        holidays = await self.holiday_repo.get_all_desc()
        return [HolidayResponse.model_validate(h) for h in holidays]

    async def create_holiday(self, data: HolidayCreate) -> HolidayResponse:
        """Create a holiday.

        Raises:
            HolidayAlreadyExistsError: If a holiday exists on the same date
        """
        holiday = await self.holiday_repo.create_unique(
            date=data.date,
            name=data.name,
            description=data.description,
        )
        if holiday is None:
            raise HolidayAlreadyExistsError(data.date.isoformat())
        logger.info("Created holiday %s on %s", holiday.id, holiday.date)
        return HolidayResponse.model_validate(holiday)

    async def delete_holiday(self, holiday_id: UUID) -> None:
        """Delete a holiday.

        Raises:
            HolidayNotFoundError: If the holiday does not exist
        """
        if not await self.holiday_repo.delete(holiday_id):
            raise HolidayNotFoundError(str(holiday_id))

    async def is_holiday(self, day: date) -> bool:
        """Check whether a date is a holiday."""
        return await self.holiday_repo.get_by_date(day) is not None
