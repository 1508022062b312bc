"""Leave-year window arithmetic and balance computation.

The leave year starts on a configurable month/day (``MM-DD``) and ends the
day before the next anniversary. Everything here is pure; counting leave and
incomplete attendance rows is done by ``LeaveService``.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta

DEFAULT_ANNUAL_LEAVE_DAYS = 14
DEFAULT_RESET_DATE = "07-16"

RESET_DATE_PATTERN = re.compile(r"^(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])$")

# Leap year used to check that a month/day exists in at least one year
_LEAP_YEAR = 2000


@dataclass(frozen=True)
class LeaveYear:
    """Inclusive leave-year window."""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class LeaveBalance:
    """Leave usage for one employee in the current leave year."""

    allowance: int
    taken_leaves: int
    no_check_in_out_days: int
    total_used: int
    remaining: int
    year_start_date: date
    year_end_date: date


def parse_reset_date(value: str) -> tuple[int, int]:
    """Parse an ``MM-DD`` reset date.

    Args:
        value: Reset date string, e.g. ``"07-16"``

    Returns:
        Tuple of (month, day)

    Raises:
        ValueError: If the value is malformed or names a day that exists in
            no year (``02-30``, ``04-31``)
    """
    match = RESET_DATE_PATTERN.match(value or "")
    if match is None:
        raise ValueError("Reset date must use the MM-DD format")

    month, day = int(match.group(1)), int(match.group(2))
    try:
        date(_LEAP_YEAR, month, day)
    except ValueError as e:
        raise ValueError(f"{value} is not a valid calendar day") from e
    return month, day


def anniversary(year: int, month: int, day: int) -> date:
    """Get the reset date in a given year.

    February 29 falls back to February 28 in non-leap years.
    """
    try:
        return date(year, month, day)
    except ValueError:
        if month == 2 and day == 29:
            return date(year, 2, 28)
        raise


def leave_year_window(today: date, month: int, day: int) -> LeaveYear:
    """Compute the leave year containing ``today``.

    A leave year runs from the reset date up to the day before the next
    reset date. Today equal to the reset date starts the new year.

    Args:
        today: Calendar date to evaluate
        month: Reset month
        day: Reset day

    Returns:
        LeaveYear with inclusive start and end dates
    """
    this_reset = anniversary(today.year, month, day)
    if today >= this_reset:
        start = this_reset
        end = anniversary(today.year + 1, month, day) - timedelta(days=1)
    else:
        start = anniversary(today.year - 1, month, day)
        end = this_reset - timedelta(days=1)
    return LeaveYear(start=start, end=end)


def compute_balance(
    allowance: int,
    taken_leaves: int,
    no_check_in_out_days: int,
    window: LeaveYear,
) -> LeaveBalance:
    """Combine counts into a balance; remaining never goes below zero."""
    total_used = taken_leaves + no_check_in_out_days
    return LeaveBalance(
        allowance=allowance,
        taken_leaves=taken_leaves,
        no_check_in_out_days=no_check_in_out_days,
        total_used=total_used,
        remaining=max(0, allowance - total_used),
        year_start_date=window.start,
        year_end_date=window.end,
    )
