"""Holiday ORM model."""

import datetime

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from attendance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class HolidayORM(Base, UUIDMixin, TimestampMixin):
    """Company-wide non-working day."""

    __tablename__ = "holidays"

    date: Mapped[datetime.date] = mapped_column(Date, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
