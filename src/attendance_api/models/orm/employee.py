"""Employee ORM model."""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from attendance_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model.

    Rows are created lazily the first time a chat user checks in or applies
    for leave. Employees are never deleted, only deactivated.
    """

    __tablename__ = "employees"

    # Chat user id (Slack user id or Discord snowflake)
    platform_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    platform: Mapped[str] = mapped_column(String(20), nullable=False, default="discord")
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index("idx_employees_is_active", "is_active"),
    )
