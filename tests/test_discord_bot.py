"""Tests for the Discord interactions endpoint."""

import json
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM

EPHEMERAL = 64
USER = {"id": "4242", "username": "ravi", "global_name": "Ravi K"}


class Discord:
    """Sends signed interactions as one guild member."""

    def __init__(self, client: TestClient, sign) -> None:
        self.client = client
        self.sign = sign

    def send(self, interaction: dict[str, Any]) -> dict[str, Any]:
        body = json.dumps({"member": {"user": USER}, **interaction}).encode()
        response = self.client.post("/discord/interactions", content=body, headers=self.sign(body))
        assert response.status_code == 200
        return response.json()

    def command(self, name: str) -> dict[str, Any]:
        return self.send({"type": 2, "data": {"name": name}})

    def select(self, custom_id: str, value: str) -> dict[str, Any]:
        return self.send({"type": 3, "data": {"custom_id": custom_id, "component_type": 3, "values": [value]}})

    def button(self, custom_id: str) -> dict[str, Any]:
        return self.send({"type": 3, "data": {"custom_id": custom_id, "component_type": 2}})

    def modal(self, custom_id: str, values: dict[str, str]) -> dict[str, Any]:
        rows = [{"type": 1, "components": [{"type": 4, "custom_id": k, "value": v}]} for k, v in values.items()]
        return self.send({"type": 5, "data": {"custom_id": custom_id, "components": rows}})


def discord(client: TestClient, discord_headers) -> Discord:
    return Discord(client, discord_headers)


def run_checkin_wizard(bot: Discord) -> dict[str, Any]:
    bot.command("checkin")
    bot.select("work_from_select", "office")
    bot.select("status_select", "Focused")
    bot.button("proceed_checkin")
    return bot.modal("checkin_modal", {"today_plan": "Fix bugs", "yesterday_task": "Triage"})


class TestDiscordInteractions:
    """Interaction types and the check-in wizard."""

    def test_ping(self, client: TestClient, discord_headers) -> None:
        body = b'{"type": 1}'
        response = client.post("/discord/interactions", content=body, headers=discord_headers(body))
        assert response.json() == {"type": 1}

    def test_invalid_signature_rejected(self, client: TestClient, discord_headers) -> None:
        headers = discord_headers(b'{"type": 1}')
        response = client.post("/discord/interactions", content=b'{"type": 2}', headers=headers)
        assert response.status_code == 401

    def test_checkin_wizard(self, client: TestClient, discord_headers, db: Session, fake_redis) -> None:
        bot = discord(client, discord_headers)

        start = bot.command("checkin")
        assert start["type"] == 4
        assert start["data"]["flags"] == EPHEMERAL
        assert start["data"]["components"][0]["components"][0]["custom_id"] == "work_from_select"

        step = bot.select("work_from_select", "office")
        assert step["type"] == 7
        assert step["data"]["components"][1]["components"][0]["custom_id"] == "status_select"

        step = bot.select("status_select", "Focused")
        proceed = step["data"]["components"][-1]["components"][0]
        assert proceed["custom_id"] == "proceed_checkin"
        assert proceed["disabled"] is False

        modal = bot.button("proceed_checkin")
        assert modal["type"] == 9
        assert modal["data"]["custom_id"] == "checkin_modal"

        done = bot.modal("checkin_modal", {"today_plan": "Fix bugs", "yesterday_task": "Triage"})
        assert done["type"] == 4
        assert done["data"]["flags"] == EPHEMERAL
        assert "Check-in Successful" in done["data"]["content"]
        assert "wizard:checkin:4242" not in fake_redis.data

        record = db.execute(select(AttendanceORM)).scalar_one()
        assert record.work_from == "office"
        assert record.current_status == "Focused"
        employee = db.execute(select(EmployeeORM)).scalar_one()
        assert employee.platform == "discord"
        assert employee.display_name == "Ravi K"

    def test_proceed_without_selections(self, client: TestClient, discord_headers) -> None:
        bot = discord(client, discord_headers)
        bot.command("checkin")
        bot.select("work_from_select", "remote")

        reply = bot.button("proceed_checkin")

        assert reply["type"] == 4
        assert "select both work location and status" in reply["data"]["content"]

    def test_expired_wizard_state(self, client: TestClient, discord_headers) -> None:
        bot = discord(client, discord_headers)

        reply = bot.modal("checkin_modal", {"today_plan": "a", "yesterday_task": "b"})

        assert "Please start over with /checkin" in reply["data"]["content"]

    def test_status_select_after_expiry_stores_nothing(self, client: TestClient, discord_headers, fake_redis) -> None:
        bot = discord(client, discord_headers)

        reply = bot.select("status_select", "Focused")

        assert reply["type"] == 4
        assert "Please start over with /checkin" in reply["data"]["content"]
        assert fake_redis.data == {}

    def test_second_checkin_rejected(self, client: TestClient, discord_headers) -> None:
        bot = discord(client, discord_headers)
        run_checkin_wizard(bot)

        reply = bot.command("checkin")

        assert reply["type"] == 4
        assert reply["data"]["content"] == "❌ You have already checked in today."
        assert reply["data"]["flags"] == EPHEMERAL

    def test_checkout(self, client: TestClient, discord_headers, db: Session) -> None:
        bot = discord(client, discord_headers)
        run_checkin_wizard(bot)

        modal = bot.command("checkout")
        assert modal["type"] == 9
        assert modal["data"]["custom_id"] == "checkout_modal"

        bad = bot.modal(
            "checkout_modal",
            {"accomplishments": "a", "blockers": "", "tomorrow_priorities": "b", "overall_rating": "zero"},
        )
        assert "valid rating" in bad["data"]["content"]

        done = bot.modal(
            "checkout_modal",
            {"accomplishments": "Shipped", "blockers": "", "tomorrow_priorities": "Docs", "overall_rating": "5"},
        )
        assert "Check-out Successful" in done["data"]["content"]

        record = db.execute(select(AttendanceORM)).scalar_one()
        assert record.overall_rating == 5
        assert record.blockers == "None"

        assert "already checked out" in bot.command("checkout")["data"]["content"]

    def test_leave(self, client: TestClient, discord_headers) -> None:
        bot = discord(client, discord_headers)

        modal = bot.command("leave")
        assert modal["data"]["custom_id"] == "leave_modal"

        done = bot.modal("leave_modal", {"leave_description": "Wedding"})
        assert "Leave Applied Successfully" in done["data"]["content"]

        assert "on leave today" in bot.command("checkin")["data"]["content"]
        assert "already applied" in bot.command("leave")["data"]["content"]

    def test_status(self, client: TestClient, discord_headers) -> None:
        bot = discord(client, discord_headers)
        run_checkin_wizard(bot)

        reply = bot.command("status")

        assert reply["data"]["flags"] == EPHEMERAL
        assert "Your Attendance Status (Ravi K)" in reply["data"]["content"]
        assert "Not checked out yet" in reply["data"]["content"]
