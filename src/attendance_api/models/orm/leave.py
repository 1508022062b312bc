"""Leave record ORM model."""

import datetime
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from attendance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class LeaveORM(Base, UUIDMixin, TimestampMixin):
    """One leave day for one employee."""

    __tablename__ = "leaves"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_leaves_employee_date"),
        Index("idx_leaves_date", "date"),
    )
