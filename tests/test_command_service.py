"""Tests for the chat command handlers."""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    EmployeeNotRegisteredError,
    InvalidRatingError,
    LeaveAfterAttendanceError,
    LeaveAlreadyAppliedError,
    NotCheckedInError,
    OnLeaveError,
)
from attendance_api.models.domain.attendance import DayState
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.services.command_service import ChatUser, CommandService, parse_rating

TODAY = date(2024, 8, 14)
MORNING = datetime(2024, 8, 14, 4, 10, tzinfo=timezone.utc)
EVENING = datetime(2024, 8, 14, 11, 30, tzinfo=timezone.utc)

USER = ChatUser(platform_id="U123", platform="slack", username="asha", display_name="Asha")


def service_at(session: AsyncSession, now: datetime = MORNING, today: date = TODAY) -> CommandService:
    return CommandService(session, today=today, now=now)


async def check_in(session: AsyncSession, now: datetime = MORNING) -> AttendanceORM:
    return await service_at(session, now).check_in(
        USER,
        work_from="office",
        current_status="Focused",
        today_plan="Ship the release",
        yesterday_task="Code review",
    )


class TestParseRating:
    """Rating input validation."""

    @pytest.mark.parametrize(("value", "expected"), [("1", 1), ("5", 5), (" 4 ", 4), (3, 3)])
    def test_valid_rating(self, value: str | int, expected: int) -> None:
        assert parse_rating(value) == expected

    @pytest.mark.parametrize("value", ["0", "6", "-1", "abc", "", "4.5", None])
    def test_invalid_rating(self, value: str | None) -> None:
        with pytest.raises(InvalidRatingError):
            parse_rating(value)


class TestCheckIn:
    """Check-in command."""

    async def test_check_in_registers_employee(self, session: AsyncSession) -> None:
        record = await check_in(session)

        assert record.date == TODAY
        assert record.work_from == "office"
        assert record.current_status == "Focused"
        assert record.check_out_time is None

        employee = (await session.execute(select(EmployeeORM))).scalar_one()
        assert employee.platform_id == "U123"
        assert employee.platform == "slack"
        assert employee.display_name == "Asha"

    async def test_second_check_in_rejected_and_first_timestamp_kept(self, session: AsyncSession) -> None:
        first = await check_in(session)
        first_time = first.check_in_time

        with pytest.raises(AlreadyCheckedInError):
            await check_in(session, now=MORNING + timedelta(hours=2))

        rows = (await session.execute(select(AttendanceORM))).scalars().all()
        assert len(rows) == 1
        assert rows[0].check_in_time.replace(tzinfo=None) == first_time.replace(tzinfo=None)

    async def test_ensure_can_check_in_fast_fails(self, session: AsyncSession) -> None:
        service = service_at(session)
        await service.ensure_can_check_in(USER)

        await check_in(session)

        with pytest.raises(AlreadyCheckedInError):
            await service.ensure_can_check_in(USER)

    async def test_check_in_rejected_on_leave(self, session: AsyncSession) -> None:
        await service_at(session).apply_leave(USER, "Family event")

        with pytest.raises(OnLeaveError) as exc_info:
            await check_in(session)
        assert "cannot check in" in exc_info.value.message

        with pytest.raises(OnLeaveError):
            await service_at(session).ensure_can_check_in(USER)

    async def test_invalid_work_location_rejected(self, session: AsyncSession) -> None:
        with pytest.raises(ValueError):
            await service_at(session).check_in(
                USER, work_from="beach", current_status="Good", today_plan="x", yesterday_task="y"
            )

    async def test_check_in_again_next_day(self, session: AsyncSession) -> None:
        await check_in(session)
        record = await service_at(session, MORNING + timedelta(days=1), TODAY + timedelta(days=1)).check_in(
            USER, work_from="remote", current_status="Good", today_plan="a", yesterday_task="b"
        )
        assert record.date == TODAY + timedelta(days=1)


class TestCheckOut:
    """Check-out command."""

    async def test_check_out_records_reflection(self, session: AsyncSession) -> None:
        await check_in(session)

        record = await service_at(session, EVENING).check_out(
            USER,
            accomplishments="Released v2",
            blockers="Flaky CI",
            tomorrow_priorities="Retro",
            rating="5",
        )

        assert record.check_out_time is not None
        assert record.accomplishments == "Released v2"
        assert record.blockers == "Flaky CI"
        assert record.overall_rating == 5

    @pytest.mark.parametrize("blockers", ["", "   ", None])
    async def test_blank_blockers_stored_as_none_text(self, session: AsyncSession, blockers: str | None) -> None:
        await check_in(session)

        record = await service_at(session, EVENING).check_out(
            USER, accomplishments="Done", blockers=blockers, tomorrow_priorities="More", rating=4
        )

        assert record.blockers == "None"

    async def test_unknown_user_must_check_in_first(self, session: AsyncSession) -> None:
        with pytest.raises(EmployeeNotRegisteredError) as exc_info:
            await service_at(session, EVENING).check_out(
                USER, accomplishments="a", blockers=None, tomorrow_priorities="b", rating=3
            )
        assert "check in first" in exc_info.value.message

    async def test_not_checked_in_today(self, session: AsyncSession) -> None:
        await check_in(session)
        tomorrow = service_at(session, EVENING + timedelta(days=1), TODAY + timedelta(days=1))

        with pytest.raises(NotCheckedInError):
            await tomorrow.check_out(USER, accomplishments="a", blockers=None, tomorrow_priorities="b", rating=3)
        with pytest.raises(NotCheckedInError):
            await tomorrow.ensure_can_check_out(USER)

    async def test_double_check_out_rejected(self, session: AsyncSession) -> None:
        await check_in(session)
        service = service_at(session, EVENING)
        await service.check_out(USER, accomplishments="a", blockers=None, tomorrow_priorities="b", rating=3)

        with pytest.raises(AlreadyCheckedOutError):
            await service.check_out(USER, accomplishments="c", blockers=None, tomorrow_priorities="d", rating=5)
        with pytest.raises(AlreadyCheckedOutError):
            await service.ensure_can_check_out(USER)

        record = (await session.execute(select(AttendanceORM))).scalar_one()
        assert record.accomplishments == "a"
        assert record.overall_rating == 3

    async def test_invalid_rating_rejected_before_write(self, session: AsyncSession) -> None:
        await check_in(session)

        with pytest.raises(InvalidRatingError):
            await service_at(session, EVENING).check_out(
                USER, accomplishments="a", blockers=None, tomorrow_priorities="b", rating="7"
            )

        record = (await session.execute(select(AttendanceORM))).scalar_one()
        assert record.check_out_time is None


class TestApplyLeave:
    """Leave command."""

    async def test_apply_leave_registers_employee(self, session: AsyncSession) -> None:
        leave = await service_at(session).apply_leave(USER, "  Dentist  ")

        assert leave.date == TODAY
        assert leave.description == "Dentist"
        assert (await session.execute(select(func.count(EmployeeORM.id)))).scalar_one() == 1

    async def test_second_leave_same_day_rejected(self, session: AsyncSession) -> None:
        service = service_at(session)
        await service.apply_leave(USER, "Sick")

        with pytest.raises(LeaveAlreadyAppliedError):
            await service.apply_leave(USER, "Still sick")
        with pytest.raises(LeaveAlreadyAppliedError):
            await service.ensure_can_apply_leave(USER)

        assert (await session.execute(select(func.count(LeaveORM.id)))).scalar_one() == 1

    async def test_leave_after_check_in_rejected(self, session: AsyncSession) -> None:
        await check_in(session)
        service = service_at(session)

        with pytest.raises(LeaveAfterAttendanceError) as exc_info:
            await service.apply_leave(USER, "Feeling unwell")
        assert "cannot apply for leave after checking in" in exc_info.value.message

        with pytest.raises(LeaveAfterAttendanceError):
            await service.ensure_can_apply_leave(USER)

    async def test_check_out_rejected_on_leave(self, session: AsyncSession) -> None:
        await service_at(session).apply_leave(USER, "Trip")

        with pytest.raises(OnLeaveError) as exc_info:
            await service_at(session, EVENING).check_out(
                USER, accomplishments="a", blockers=None, tomorrow_priorities="b", rating=3
            )
        assert "cannot check out" in exc_info.value.message


class TestStatus:
    """Status command."""

    async def test_status_of_unknown_user(self, session: AsyncSession) -> None:
        report = await service_at(session).status(USER)

        assert report.state == DayState.NO_RECORD
        assert report.stats is None

    async def test_status_follows_day_state(self, session: AsyncSession) -> None:
        await check_in(session)
        report = await service_at(session).status(USER)
        assert report.state == DayState.CHECKED_IN
        assert report.stats.total_days == 1

        await service_at(session, EVENING).check_out(
            USER, accomplishments="a", blockers=None, tomorrow_priorities="b", rating=4
        )
        report = await service_at(session).status(USER)
        assert report.state == DayState.COMPLETED
        assert report.stats.completed_days == 1
        assert report.stats.avg_rating == 4
        assert report.balance is not None
        assert report.balance.allowance == 14

    async def test_status_on_leave(self, session: AsyncSession) -> None:
        await service_at(session).apply_leave(USER, "Holiday trip")

        report = await service_at(session).status(USER)

        assert report.state == DayState.ON_LEAVE
        assert report.leave.description == "Holiday trip"
        assert report.balance.taken_leaves == 1
