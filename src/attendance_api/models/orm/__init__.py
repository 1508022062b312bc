"""SQLAlchemy ORM models package."""

from attendance_api.models.orm.base import Base
from attendance_api.models.orm.admin_user import AdminUserORM
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.holiday import HolidayORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.models.orm.settings import ProjectSettingORM

__all__ = [
    "Base",
    "AdminUserORM",
    "AttendanceORM",
    "EmployeeORM",
    "HolidayORM",
    "LeaveORM",
    "ProjectSettingORM",
]
