"""Discord bot router: the interactions endpoint."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.bots import discord_components as ui
from attendance_api.bots import messages
from attendance_api.database import get_db
from attendance_api.dependencies import get_wizard_store
from attendance_api.exceptions import AttendanceAPIError, WizardExpiredError
from attendance_api.models.domain.attendance import Platform
from attendance_api.security.signatures import verify_discord_request
from attendance_api.services.command_service import ChatUser, CommandService
from attendance_api.services.wizard_store import WizardStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _chat_user(interaction: dict[str, Any]) -> ChatUser:
    # Guild interactions carry the user under "member", DMs at the top level
    user = interaction.get("member", {}).get("user") or interaction.get("user", {})
    user_id = str(user.get("id", ""))
    username = user.get("username") or user_id
    return ChatUser(
        platform_id=user_id,
        platform=Platform.DISCORD,
        username=username,
        display_name=user.get("global_name") or username,
    )


async def _handle_command(name: str, user: ChatUser, service: CommandService, wizard: WizardStore) -> dict[str, Any]:
    if name == "checkin":
        await service.ensure_can_check_in(user)
        await wizard.reset(user.platform_id)
        return ui.checkin_wizard_start()
    if name == "checkout":
        await service.ensure_can_check_out(user)
        return ui.checkout_modal()
    if name in ("leave", "applyleave"):
        await service.ensure_can_apply_leave(user)
        return ui.leave_modal()
    if name in ("status", "askstatus"):
        report = await service.status(user)
        return ui.ephemeral(messages.status_text(report, user.display_name))
    return ui.ephemeral(messages.HELP_TEXT)


async def _handle_component(custom_id: str, values: list[str], user: ChatUser, wizard: WizardStore) -> dict[str, Any]:
    if custom_id == ui.WORK_FROM_SELECT and values:
        state = await wizard.update(user.platform_id, work_from=values[0])
        return ui.checkin_wizard_update(
            f"Work location: {state['work_from'].capitalize()}\nHow are you feeling today?",
            state["work_from"],
            None,
        )
    if custom_id == ui.STATUS_SELECT and values:
        if not (await wizard.get(user.platform_id)).get("work_from"):
            raise WizardExpiredError()
        state = await wizard.update(user.platform_id, current_status=values[0])
        return ui.checkin_wizard_update(
            f"Work location: {state['work_from'].capitalize()}\n"
            f"Feeling: {state['current_status']}\n"
            "Click the button below to continue.",
            state["work_from"],
            state["current_status"],
        )
    if custom_id == ui.PROCEED_CHECKIN:
        state = await wizard.get(user.platform_id)
        if not state.get("work_from") or not state.get("current_status"):
            return ui.ephemeral(messages.SELECTIONS_MISSING)
        return ui.checkin_modal()
    return ui.ephemeral(messages.GENERIC_ERROR)


async def _handle_modal(
    custom_id: str,
    values: dict[str, str],
    user: ChatUser,
    service: CommandService,
    wizard: WizardStore,
) -> dict[str, Any]:
    if custom_id == ui.CHECKIN_MODAL:
        state = await wizard.get(user.platform_id)
        if not state.get("work_from") or not state.get("current_status"):
            raise WizardExpiredError()
        record = await service.check_in(
            user,
            work_from=state["work_from"],
            current_status=state["current_status"],
            today_plan=values.get("today_plan", ""),
            yesterday_task=values.get("yesterday_task", ""),
        )
        await wizard.clear(user.platform_id)
        return ui.ephemeral(messages.checkin_success(record))
    if custom_id == ui.CHECKOUT_MODAL:
        record = await service.check_out(
            user,
            accomplishments=values.get("accomplishments", ""),
            blockers=values.get("blockers"),
            tomorrow_priorities=values.get("tomorrow_priorities", ""),
            rating=values.get("overall_rating"),
        )
        return ui.ephemeral(messages.checkout_success(record))
    if custom_id == ui.LEAVE_MODAL:
        leave = await service.apply_leave(user, values.get("leave_description", ""))
        return ui.ephemeral(messages.leave_success(leave))
    return ui.ephemeral(messages.GENERIC_ERROR)


@router.post("/interactions")
async def interactions(
    body: bytes = Depends(verify_discord_request),
    db: AsyncSession = Depends(get_db),
    wizard: WizardStore = Depends(get_wizard_store),
) -> dict[str, Any]:
    """Answer a Discord interaction. Every reply is ephemeral."""
    interaction = json.loads(body)
    interaction_type = interaction.get("type")
    if interaction_type == ui.PING:
        return {"type": ui.PONG}

    data = interaction.get("data", {})
    user = _chat_user(interaction)
    service = CommandService(db)

    try:
        if interaction_type == ui.APPLICATION_COMMAND:
            return await _handle_command(data.get("name", ""), user, service, wizard)
        if interaction_type == ui.MESSAGE_COMPONENT:
            return await _handle_component(data.get("custom_id", ""), data.get("values", []), user, wizard)
        if interaction_type == ui.MODAL_SUBMIT:
            response = await _handle_modal(data.get("custom_id", ""), ui.modal_values(data), user, service, wizard)
            await db.commit()
            return response
    except AttendanceAPIError as e:
        return ui.ephemeral(e.message)
    except (RedisError, ValueError) as e:
        logger.error("Discord interaction failed: %s", e, exc_info=True)
        return ui.ephemeral(messages.GENERIC_ERROR)

    return ui.ephemeral(messages.GENERIC_ERROR)
