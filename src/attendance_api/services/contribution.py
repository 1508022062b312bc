"""Contribution-level classification for the attendance matrix."""

from collections.abc import Container
from datetime import date, datetime

from attendance_api.models.domain.attendance import ContributionLevel

EXCELLENT_RATING = 5
GOOD_RATING = 4

# date.weekday() value for Saturday, the weekly day off
SATURDAY = 5


def classify_day(
    day: date,
    today: date,
    project_start: date | None,
    holidays: Container[date],
    on_leave: bool,
    check_in_time: datetime | None = None,
    check_out_time: datetime | None = None,
    rating: int | None = None,
    has_record: bool | None = None,
) -> ContributionLevel:
    """Classify one employee-day.

    Rules are applied in priority order: inactive, non-working, on leave,
    absent, partial, then a rating-based level for completed days.

    Args:
        day: Day being classified
        today: Current calendar date
        project_start: Days before this are inactive (None disables the rule)
        holidays: Holiday dates
        on_leave: Whether a leave row exists for the day
        check_in_time: Check-in timestamp, if any
        check_out_time: Check-out timestamp, if any
        rating: Overall rating of the day, if any
        has_record: Whether an attendance row exists; inferred from the
            timestamps when omitted

    Returns:
        ContributionLevel for the day
    """
    if day > today or (project_start is not None and day < project_start):
        return ContributionLevel.INACTIVE
    if day.weekday() == SATURDAY or day in holidays:
        return ContributionLevel.NON_WORKING
    if on_leave:
        return ContributionLevel.ON_LEAVE

    if has_record is None:
        has_record = check_in_time is not None or check_out_time is not None
    if not has_record:
        return ContributionLevel.ABSENT
    if check_in_time is None or check_out_time is None:
        return ContributionLevel.PARTIAL

    if rating is not None and rating >= EXCELLENT_RATING:
        return ContributionLevel.EXCELLENT
    if rating is not None and rating >= GOOD_RATING:
        return ContributionLevel.GOOD
    return ContributionLevel.COMPLETE
