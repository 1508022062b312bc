"""Holiday repository."""

from datetime import date

from sqlalchemy import select

from attendance_api.models.orm.holiday import HolidayORM
from attendance_api.repositories.base import BaseRepository


class HolidayRepository(BaseRepository[HolidayORM]):
    """Repository for holidays."""

    model = HolidayORM

    async def get_by_date(self, day: date) -> HolidayORM | None:
        """Get the holiday on a date, if any."""
        result = await self.session.execute(select(HolidayORM).where(HolidayORM.date == day))
        return result.scalar_one_or_none()

    async def get_all_desc(self) -> list[HolidayORM]:
        """Get all holidays, latest date first."""
        result = await self.session.execute(select(HolidayORM).order_by(HolidayORM.date.desc()))
        return list(result.scalars().all())

    async def get_between(self, start: date, end: date) -> list[HolidayORM]:
        """Get holidays dated in [start, end]."""
        result = await self.session.execute(
            select(HolidayORM)
            .where(HolidayORM.date >= start, HolidayORM.date <= end)
            .order_by(HolidayORM.date)
        )
        return list(result.scalars().all())
