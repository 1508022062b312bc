"""Interaction responses and components for the Discord bot."""

from typing import Any

from attendance_api.models.domain.attendance import Mood, WorkLocation

# Interaction types
PING = 1
APPLICATION_COMMAND = 2
MESSAGE_COMPONENT = 3
MODAL_SUBMIT = 5

# Interaction callback types
PONG = 1
CHANNEL_MESSAGE_WITH_SOURCE = 4
UPDATE_MESSAGE = 7
MODAL = 9

# Component types
ACTION_ROW = 1
BUTTON = 2
STRING_SELECT = 3
TEXT_INPUT = 4

BUTTON_PRIMARY = 1
TEXT_SHORT = 1
TEXT_PARAGRAPH = 2

EPHEMERAL = 1 << 6

WORK_FROM_SELECT = "work_from_select"
STATUS_SELECT = "status_select"
PROCEED_CHECKIN = "proceed_checkin"
CHECKIN_MODAL = "checkin_modal"
CHECKOUT_MODAL = "checkout_modal"
LEAVE_MODAL = "leave_modal"


def ephemeral(content: str) -> dict[str, Any]:
    """Reply visible only to the invoking user."""
    return {"type": CHANNEL_MESSAGE_WITH_SOURCE, "data": {"content": content, "flags": EPHEMERAL}}


def _row(*components: dict[str, Any]) -> dict[str, Any]:
    return {"type": ACTION_ROW, "components": list(components)}


def _select(custom_id: str, placeholder: str, options: list[tuple[str, str]], selected: str | None = None) -> dict[str, Any]:
    if selected is not None:
        label = next((label for label, value in options if value == selected), selected)
        return {
            "type": STRING_SELECT,
            "custom_id": custom_id,
            "placeholder": label,
            "options": [{"label": label, "value": selected, "default": True}],
            "disabled": True,
        }
    return {
        "type": STRING_SELECT,
        "custom_id": custom_id,
        "placeholder": placeholder,
        "options": [{"label": label, "value": value} for label, value in options],
    }


def _proceed_button(enabled: bool) -> dict[str, Any]:
    return {
        "type": BUTTON,
        "style": BUTTON_PRIMARY,
        "custom_id": PROCEED_CHECKIN,
        "label": "Proceed to Check-in",
        "disabled": not enabled,
    }


WORK_FROM_OPTIONS = [(loc.value.capitalize(), loc.value) for loc in WorkLocation]
MOOD_OPTIONS = [(mood.value, mood.value) for mood in Mood]


def checkin_wizard(work_from: str | None = None, current_status: str | None = None) -> list[dict[str, Any]]:
    """Component rows of the check-in wizard for the current selections."""
    rows = [_row(_select(WORK_FROM_SELECT, "Select work location", WORK_FROM_OPTIONS, work_from))]
    if work_from is not None:
        rows.append(_row(_select(STATUS_SELECT, "How are you feeling today?", MOOD_OPTIONS, current_status)))
    rows.append(_row(_proceed_button(work_from is not None and current_status is not None)))
    return rows


def checkin_wizard_start() -> dict[str, Any]:
    """First wizard step: pick a work location."""
    return {
        "type": CHANNEL_MESSAGE_WITH_SOURCE,
        "data": {
            "content": "Please select your work location:",
            "components": checkin_wizard(),
            "flags": EPHEMERAL,
        },
    }


def checkin_wizard_update(content: str, work_from: str | None, current_status: str | None) -> dict[str, Any]:
    """Replace the wizard message after a selection."""
    return {
        "type": UPDATE_MESSAGE,
        "data": {
            "content": content,
            "components": checkin_wizard(work_from, current_status),
            "flags": EPHEMERAL,
        },
    }


def _text_input(custom_id: str, label: str, placeholder: str, style: int = TEXT_PARAGRAPH, required: bool = True) -> dict[str, Any]:
    return _row(
        {
            "type": TEXT_INPUT,
            "custom_id": custom_id,
            "label": label,
            "style": style,
            "placeholder": placeholder,
            "required": required,
        }
    )


def _modal(custom_id: str, title: str, components: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": MODAL, "data": {"custom_id": custom_id, "title": title, "components": components}}


def checkin_modal() -> dict[str, Any]:
    """Check-in reflection modal."""
    return _modal(
        CHECKIN_MODAL,
        "Daily Check-in",
        [
            _text_input("today_plan", "What's your plan for today?", "Describe your main tasks and goals for today..."),
            _text_input("yesterday_task", "What did you work on yesterday?", "Briefly describe yesterday's accomplishments..."),
        ],
    )


def checkout_modal() -> dict[str, Any]:
    """Check-out reflection modal."""
    return _modal(
        CHECKOUT_MODAL,
        "Daily Check-out",
        [
            _text_input("accomplishments", "What did you accomplish today?", "List your main accomplishments and completed tasks..."),
            _text_input("blockers", "Any blockers or challenges?", "Describe any obstacles you faced or help you need...", required=False),
            _text_input("tomorrow_priorities", "Tomorrow's priorities", "What are your main priorities for tomorrow?"),
            _text_input("overall_rating", "Rate your day (1-5)", "Rate your productivity: 1 (Poor) to 5 (Excellent)", style=TEXT_SHORT),
        ],
    )


def leave_modal() -> dict[str, Any]:
    """Leave application modal."""
    return _modal(
        LEAVE_MODAL,
        "Apply for Leave",
        [_text_input("leave_description", "Leave Description", "Please provide the reason for your leave...")],
    )


def modal_values(data: dict[str, Any]) -> dict[str, str]:
    """Flatten submitted modal rows into custom id -> value."""
    values: dict[str, str] = {}
    for row in data.get("components", []):
        for component in row.get("components", []):
            values[component["custom_id"]] = component.get("value") or ""
    return values
