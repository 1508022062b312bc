"""Block Kit modal views for the Slack bot."""

from typing import Any

from attendance_api.models.domain.attendance import Mood, WorkLocation

CHECKIN_MODAL = "checkin_modal"
CHECKOUT_MODAL = "checkout_modal"
LEAVE_MODAL = "leave_modal"


def _option(label: str, value: str) -> dict[str, Any]:
    return {"text": {"type": "plain_text", "text": label}, "value": value}


def _text_input(
    block_id: str,
    label: str,
    placeholder: str,
    multiline: bool = True,
    optional: bool = False,
) -> dict[str, Any]:
    return {
        "type": "input",
        "block_id": block_id,
        "optional": optional,
        "label": {"type": "plain_text", "text": label},
        "element": {
            "type": "plain_text_input",
            "action_id": block_id,
            "multiline": multiline,
            "placeholder": {"type": "plain_text", "text": placeholder},
        },
    }


def _static_select(block_id: str, label: str, placeholder: str, options: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "type": "input",
        "block_id": block_id,
        "label": {"type": "plain_text", "text": label},
        "element": {
            "type": "static_select",
            "action_id": block_id,
            "placeholder": {"type": "plain_text", "text": placeholder},
            "options": options,
        },
    }


def _modal(callback_id: str, title: str, blocks: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "type": "modal",
        "callback_id": callback_id,
        "title": {"type": "plain_text", "text": title},
        "submit": {"type": "plain_text", "text": "Submit"},
        "close": {"type": "plain_text", "text": "Cancel"},
        "blocks": blocks,
    }


def checkin_view() -> dict[str, Any]:
    """Daily check-in modal."""
    return _modal(
        CHECKIN_MODAL,
        "Daily Check-in",
        [
            _static_select(
                "work_from",
                "Work location",
                "Select work location",
                [_option(loc.value.capitalize(), loc.value) for loc in WorkLocation],
            ),
            _static_select(
                "current_status",
                "How are you feeling today?",
                "Select your mood",
                [_option(mood.value, mood.value) for mood in Mood],
            ),
            _text_input("today_plan", "What's your plan for today?", "Describe your main tasks and goals for today..."),
            _text_input("yesterday_task", "What did you work on yesterday?", "Briefly describe yesterday's accomplishments..."),
        ],
    )


def checkout_view() -> dict[str, Any]:
    """Daily check-out modal."""
    return _modal(
        CHECKOUT_MODAL,
        "Daily Check-out",
        [
            _text_input("accomplishments", "What did you accomplish today?", "List your main accomplishments and completed tasks..."),
            _text_input("blockers", "Any blockers or challenges?", "Describe any obstacles you faced or help you need...", optional=True),
            _text_input("tomorrow_priorities", "Tomorrow's priorities", "What are your main priorities for tomorrow?"),
            _text_input("overall_rating", "Rate your day (1-5)", "1 (Poor) to 5 (Excellent)", multiline=False),
        ],
    )


def leave_view() -> dict[str, Any]:
    """Leave application modal."""
    return _modal(
        LEAVE_MODAL,
        "Apply for Leave",
        [_text_input("leave_description", "Leave Description", "Please provide the reason for your leave...")],
    )


def extract_values(view_state: dict[str, Any]) -> dict[str, str | None]:
    """Flatten ``view.state.values`` into action id -> submitted value."""
    values: dict[str, str | None] = {}
    for block in view_state.get("values", {}).values():
        for action_id, element in block.items():
            if element.get("type") == "static_select":
                selected = element.get("selected_option") or {}
                values[action_id] = selected.get("value")
            else:
                values[action_id] = element.get("value")
    return values
