"""Reply texts shared by the Slack and Discord bots."""

from attendance_api.models.domain.attendance import DayState
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.services.command_service import StatusReport
from attendance_api.utils.dates import format_local_time

RATING_EMOJIS = ["😞", "😐", "😊", "😄", "🤩"]

GENERIC_ERROR = "❌ Something went wrong. Please try again."
SELECTIONS_MISSING = "❌ Please select both work location and status before proceeding."
NO_RECORD_FOUND = "❌ No attendance record found. Please check in first."

HELP_TEXT = (
    "👋 Hi! I track attendance. Available commands:\n"
    "• /checkin to start your day\n"
    "• /checkout to wrap up your day\n"
    "• /applyleave to apply for leave today\n"
    "• /askstatus to see your attendance status"
)


def checkin_success(record: AttendanceORM) -> str:
    """Confirmation after a successful check-in."""
    return "\n".join(
        [
            "✅ Check-in Successful! Your attendance has been recorded.",
            f"🎯 Today's Plan: {record.today_plan}",
            f"📋 Yesterday's Task: {record.yesterday_task}",
            f"💭 Feeling Today: {(record.current_status or '').capitalize()}",
            f"🏢 Work From: {(record.work_from or '').capitalize()}",
            "Have a productive day!",
        ]
    )


def checkout_success(record: AttendanceORM) -> str:
    """Confirmation after a successful check-out."""
    rating = record.overall_rating or 0
    emoji = RATING_EMOJIS[rating - 1] if 1 <= rating <= len(RATING_EMOJIS) else ""
    return "\n".join(
        [
            "👋 Check-out Successful! Your work day has been recorded. Great job today!",
            f"✅ Accomplishments: {record.accomplishments}",
            f"🚧 Blockers: {record.blockers}",
            f"📅 Tomorrow's Priorities: {record.tomorrow_priorities}",
            f"⭐ Day Rating: {rating}/5 {emoji}".rstrip(),
            "Have a great evening!",
        ]
    )


def leave_success(leave: LeaveORM) -> str:
    """Confirmation after a successful leave application."""
    return "\n".join(
        [
            "🏖️ Leave Applied Successfully! Your leave application has been recorded.",
            f"📅 Date: {leave.date.isoformat()}",
            f"📝 Description: {leave.description}",
            "Take care and rest well!",
        ]
    )


def status_text(report: StatusReport, display_name: str) -> str:
    """Render the status command answer."""
    if report.stats is None:
        return NO_RECORD_FOUND

    lines = [f"📊 Your Attendance Status ({display_name})", "", "📅 Today's Status"]
    if report.state == DayState.ON_LEAVE:
        lines.append(f"🏖️ On leave: {report.leave.description if report.leave else ''}".rstrip())
    elif report.state == DayState.NO_RECORD:
        lines.append("❌ Not checked in yet")
    else:
        lines.append(f"✅ Checked in: {format_local_time(report.attendance.check_in_time)}")
        if report.state == DayState.COMPLETED:
            lines.append(f"👋 Checked out: {format_local_time(report.attendance.check_out_time)}")
        else:
            lines.append("⏳ Not checked out yet")

    stats = report.stats
    avg_rating = f"{stats.avg_rating:.1f}" if stats.avg_rating is not None else "N/A"
    lines += [
        "",
        "📈 30-Day Stats",
        f"Days worked: {stats.total_days}",
        f"Completed days: {stats.completed_days}",
        f"Average rating: {avg_rating}/5",
    ]

    if report.balance is not None:
        balance = report.balance
        lines += [
            "",
            "🌴 Leave Balance",
            f"Remaining: {balance.remaining}/{balance.allowance} days "
            f"(leave year {balance.year_start_date.isoformat()} to {balance.year_end_date.isoformat()})",
        ]
    return "\n".join(lines)
