"""SQL injection prevention tests.

Chat users type free text (plans, blockers, leave reasons) and pick values
that reach the database. SQLAlchemy parameterizes every query, so hostile
input must be stored verbatim and never change what a query does.
"""

import os
from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.repositories.admin_user_repository import AdminUserRepository
from attendance_api.services.command_service import ChatUser, CommandService

SQL_INJECTION_PAYLOADS = [
    "'; DROP TABLE employees; --",
    "1' OR '1'='1",
    "1; DELETE FROM leaves WHERE '1'='1",
    "' UNION SELECT * FROM admin_users --",
    "1'; SELECT pg_sleep(5) --",
    "1'; UPDATE admin_users SET is_active = true; --",
    "%27%20OR%201%3D1%20--",
    "ʼ OR 1=1 --",
    "1'/**/OR/**/1=1--",
    "$$; DROP TABLE attendance; $$",
]


class TestChatInputIsStoredVerbatim:
    """Hostile chat input round-trips as plain data."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    async def test_leave_description(self, session: AsyncSession, payload: str) -> None:
        user = ChatUser(platform_id="U1", platform="slack", username="u1", display_name="U1")
        leave = await CommandService(session, today=date(2024, 8, 14)).apply_leave(user, payload)

        assert leave.description == payload.strip()
        assert (await session.execute(select(func.count(LeaveORM.id)))).scalar_one() == 1

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    async def test_platform_id_lookup(self, session: AsyncSession, payload: str) -> None:
        user = ChatUser(platform_id=payload, platform="discord", username=payload, display_name=payload)
        service = CommandService(session, today=date(2024, 8, 14))

        report = await service.status(user)
        assert report.stats is None

        await service.apply_leave(user, "reason")
        employee = (await session.execute(select(EmployeeORM))).scalar_one()
        assert employee.platform_id == payload

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    async def test_admin_username_lookup(self, session: AsyncSession, payload: str) -> None:
        assert await AdminUserRepository(session).get_by_username(payload) is None


class TestNoRawSQL:
    """Verify no raw SQL usage in repositories."""

    def test_no_text_calls_in_repositories(self) -> None:
        """Repositories must not build queries with sqlalchemy.text()."""
        repo_dir = os.path.join(os.path.dirname(__file__), "..", "src", "attendance_api", "repositories")

        for filename in os.listdir(repo_dir):
            if not filename.endswith(".py"):
                continue

            with open(os.path.join(repo_dir, filename)) as f:
                for i, line in enumerate(f, 1):
                    stripped = line.strip()
                    if stripped.startswith("#"):
                        continue
                    if ".execute(text(" in line or "= text(" in line:
                        pytest.fail(f"Potential raw SQL in {filename}:{i}: {stripped}")
