"""Slack bot router: slash commands, modal submissions and events."""

import json
import logging
from typing import Any
from urllib.parse import parse_qs

import httpx
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.bots import messages
from attendance_api.bots.slack_views import (
    CHECKIN_MODAL,
    CHECKOUT_MODAL,
    LEAVE_MODAL,
    checkin_view,
    checkout_view,
    extract_values,
    leave_view,
)
from attendance_api.database import get_db
from attendance_api.dependencies import get_slack_provider
from attendance_api.exceptions import AttendanceAPIError, InvalidRatingError
from attendance_api.models.domain.attendance import Platform
from attendance_api.providers.slack import SlackProvider
from attendance_api.security.signatures import verify_slack_request
from attendance_api.services.command_service import ChatUser, CommandService

logger = logging.getLogger(__name__)

router = APIRouter()

CHECKIN_COMMANDS = {"/checkin"}
CHECKOUT_COMMANDS = {"/checkout"}
LEAVE_COMMANDS = {"/applyleave", "/leave"}
STATUS_COMMANDS = {"/askstatus", "/status"}


def _form(body: bytes) -> dict[str, str]:
    """Parse a url-encoded Slack body into single values."""
    return {key: values[0] for key, values in parse_qs(body.decode("utf-8")).items()}


def _ephemeral(text: str) -> dict[str, str]:
    return {"response_type": "ephemeral", "text": text}


def _command_user(form: dict[str, str]) -> ChatUser:
    user_id = form.get("user_id", "")
    username = form.get("user_name") or user_id
    return ChatUser(platform_id=user_id, platform=Platform.SLACK, username=username, display_name=username)


def _interaction_user(payload: dict[str, Any]) -> ChatUser:
    user = payload.get("user", {})
    user_id = user.get("id", "")
    username = user.get("username") or user.get("name") or user_id
    return ChatUser(platform_id=user_id, platform=Platform.SLACK, username=username, display_name=user.get("name") or username)


@router.post("/commands", response_model=None)
async def slash_command(
    body: bytes = Depends(verify_slack_request),
    db: AsyncSession = Depends(get_db),
    slack: SlackProvider = Depends(get_slack_provider),
) -> dict[str, str] | Response:
    """Handle a slash command.

    Rejections come back as ephemeral responses; accepted commands open a modal.
    """
    form = _form(body)
    command = form.get("command", "")
    user = _command_user(form)
    service = CommandService(db)

    try:
        if command in CHECKIN_COMMANDS:
            await service.ensure_can_check_in(user)
            view = checkin_view()
        elif command in CHECKOUT_COMMANDS:
            await service.ensure_can_check_out(user)
            view = checkout_view()
        elif command in LEAVE_COMMANDS:
            await service.ensure_can_apply_leave(user)
            view = leave_view()
        elif command in STATUS_COMMANDS:
            report = await service.status(user)
            return _ephemeral(messages.status_text(report, user.display_name))
        else:
            return _ephemeral(messages.HELP_TEXT)
    except AttendanceAPIError as e:
        return _ephemeral(e.message)

    try:
        await slack.open_view(form.get("trigger_id", ""), view)
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Failed to open Slack modal for %s: %s", command, e, exc_info=True)
        return _ephemeral(messages.GENERIC_ERROR)
    return Response(status_code=200)


async def _submit(callback_id: str, values: dict[str, str | None], user: ChatUser, service: CommandService) -> str:
    if callback_id == CHECKIN_MODAL:
        record = await service.check_in(
            user,
            work_from=values.get("work_from") or "",
            current_status=values.get("current_status") or "",
            today_plan=values.get("today_plan") or "",
            yesterday_task=values.get("yesterday_task") or "",
        )
        return messages.checkin_success(record)
    if callback_id == CHECKOUT_MODAL:
        record = await service.check_out(
            user,
            accomplishments=values.get("accomplishments") or "",
            blockers=values.get("blockers"),
            tomorrow_priorities=values.get("tomorrow_priorities") or "",
            rating=values.get("overall_rating"),
        )
        return messages.checkout_success(record)
    leave = await service.apply_leave(user, values.get("leave_description") or "")
    return messages.leave_success(leave)


@router.post("/interactions", response_model=None)
async def interaction(
    body: bytes = Depends(verify_slack_request),
    db: AsyncSession = Depends(get_db),
    slack: SlackProvider = Depends(get_slack_provider),
) -> dict[str, Any] | Response:
    """Handle a modal submission and DM the outcome to the user."""
    payload = json.loads(_form(body).get("payload", "{}"))
    if payload.get("type") != "view_submission":
        return Response(status_code=200)

    view = payload.get("view", {})
    callback_id = view.get("callback_id")
    if callback_id not in (CHECKIN_MODAL, CHECKOUT_MODAL, LEAVE_MODAL):
        return Response(status_code=200)

    user = _interaction_user(payload)
    values = extract_values(view.get("state", {}))

    try:
        text = await _submit(callback_id, values, user, CommandService(db))
        await db.commit()
    except InvalidRatingError as e:
        # Keep the modal open with the error next to the rating field
        return {"response_action": "errors", "errors": {"overall_rating": e.message}}
    except AttendanceAPIError as e:
        text = e.message
    except ValueError:
        text = messages.GENERIC_ERROR

    try:
        await slack.post_message(user.platform_id, text)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Failed to DM Slack user %s: %s", user.platform_id, e)
    return Response(status_code=200)


@router.post("/events")
async def events(
    body: bytes = Depends(verify_slack_request),
    slack: SlackProvider = Depends(get_slack_provider),
) -> dict[str, Any]:
    """Handle Events API callbacks: URL verification and DM help replies."""
    payload = json.loads(body or b"{}")
    if payload.get("type") == "url_verification":
        return {"challenge": payload.get("challenge")}

    event = payload.get("event", {})
    if (
        payload.get("type") == "event_callback"
        and event.get("type") == "message"
        and event.get("channel_type") == "im"
        and not event.get("bot_id")
        and not event.get("subtype")
    ):
        try:
            await slack.post_message(event.get("channel") or event.get("user", ""), messages.HELP_TEXT)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to send Slack help reply: %s", e)
    return {"ok": True}
