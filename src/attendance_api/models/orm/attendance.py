"""Attendance record ORM model."""

import datetime
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from attendance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class AttendanceORM(Base, UUIDMixin, TimestampMixin):
    """One row per employee per calendar date."""

    __tablename__ = "attendance"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    check_out_time: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    work_from: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Check-in reflection
    today_plan: Mapped[str | None] = mapped_column(Text, nullable=True)
    yesterday_task: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Check-out reflection
    accomplishments: Mapped[str | None] = mapped_column(Text, nullable=True)
    blockers: Mapped[str | None] = mapped_column(Text, nullable=True)
    tomorrow_priorities: Mapped[str | None] = mapped_column(Text, nullable=True)
    overall_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
        CheckConstraint(
            "overall_rating IS NULL OR (overall_rating >= 1 AND overall_rating <= 5)",
            name="ck_attendance_rating_range",
        ),
        Index("idx_attendance_date", "date"),
    )
