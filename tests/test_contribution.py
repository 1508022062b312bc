"""Tests for the contribution-level classifier."""

from datetime import date, datetime, timezone

import pytest

from attendance_api.models.domain.attendance import ContributionLevel
from attendance_api.services.contribution import classify_day

TODAY = date(2024, 8, 15)  # Thursday
WEDNESDAY = date(2024, 8, 14)
SATURDAY = date(2024, 8, 10)
IN_TIME = datetime(2024, 8, 14, 4, 0, tzinfo=timezone.utc)
OUT_TIME = datetime(2024, 8, 14, 12, 0, tzinfo=timezone.utc)


def classify(day: date = WEDNESDAY, **kwargs) -> ContributionLevel:
    defaults = {
        "today": TODAY,
        "project_start": date(2024, 1, 1),
        "holidays": set(),
        "on_leave": False,
    }
    defaults.update(kwargs)
    return classify_day(day, **defaults)


class TestClassifyDay:
    """Priority order of the classification rules."""

    def test_future_day_is_inactive(self) -> None:
        assert classify(date(2024, 8, 16)) == ContributionLevel.INACTIVE

    def test_day_before_project_start_is_inactive(self) -> None:
        assert classify(project_start=date(2024, 8, 15)) == ContributionLevel.INACTIVE

    def test_no_project_start_disables_rule(self) -> None:
        assert classify(date(2000, 1, 3), project_start=None) == ContributionLevel.ABSENT

    def test_saturday_is_always_non_working(self) -> None:
        level = classify(
            SATURDAY,
            on_leave=True,
            check_in_time=IN_TIME,
            check_out_time=OUT_TIME,
            rating=5,
        )
        assert level == ContributionLevel.NON_WORKING

    def test_holiday_is_non_working(self) -> None:
        level = classify(holidays={WEDNESDAY}, check_in_time=IN_TIME, check_out_time=OUT_TIME)
        assert level == ContributionLevel.NON_WORKING

    def test_leave_wins_over_attendance(self) -> None:
        assert classify(on_leave=True, check_in_time=IN_TIME) == ContributionLevel.ON_LEAVE

    def test_no_record_is_absent(self) -> None:
        assert classify() == ContributionLevel.ABSENT

    def test_check_in_only_is_partial(self) -> None:
        assert classify(check_in_time=IN_TIME) == ContributionLevel.PARTIAL

    def test_check_out_only_is_partial(self) -> None:
        assert classify(check_out_time=OUT_TIME) == ContributionLevel.PARTIAL

    def test_empty_record_is_partial(self) -> None:
        assert classify(has_record=True) == ContributionLevel.PARTIAL

    @pytest.mark.parametrize(
        ("rating", "expected"),
        [
            (5, ContributionLevel.EXCELLENT),
            (4, ContributionLevel.GOOD),
            (3, ContributionLevel.COMPLETE),
            (1, ContributionLevel.COMPLETE),
            (None, ContributionLevel.COMPLETE),
        ],
    )
    def test_completed_day_level_follows_rating(self, rating: int | None, expected: ContributionLevel) -> None:
        assert classify(check_in_time=IN_TIME, check_out_time=OUT_TIME, rating=rating) == expected

    def test_today_is_classified(self) -> None:
        assert classify(TODAY, check_in_time=IN_TIME) == ContributionLevel.PARTIAL
