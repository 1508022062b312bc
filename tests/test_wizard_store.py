"""Tests for the check-in wizard state store."""

import json

from attendance_api.services.wizard_store import WizardStore


class TestWizardStore:
    """Per-user selections with TTL."""

    async def test_missing_state_is_empty(self, wizard_store: WizardStore) -> None:
        assert await wizard_store.get("U1") == {}

    async def test_update_merges_selections(self, wizard_store: WizardStore, fake_redis) -> None:
        await wizard_store.reset("U1")
        await wizard_store.update("U1", work_from="office")
        state = await wizard_store.update("U1", current_status="Good")

        assert state == {"work_from": "office", "current_status": "Good"}
        assert await wizard_store.get("U1") == state
        assert fake_redis.ttls["wizard:checkin:U1"] == 900

    async def test_users_are_isolated(self, wizard_store: WizardStore) -> None:
        await wizard_store.update("U1", work_from="office")
        await wizard_store.update("U2", work_from="remote")

        assert (await wizard_store.get("U1"))["work_from"] == "office"
        assert (await wizard_store.get("U2"))["work_from"] == "remote"

    async def test_reset_discards_previous_selections(self, wizard_store: WizardStore) -> None:
        await wizard_store.update("U1", work_from="office", current_status="Tired")
        await wizard_store.reset("U1")

        assert await wizard_store.get("U1") == {}

    async def test_clear_removes_key(self, wizard_store: WizardStore, fake_redis) -> None:
        await wizard_store.update("U1", work_from="office")
        await wizard_store.clear("U1")

        assert "wizard:checkin:U1" not in fake_redis.data

    async def test_unreadable_state_is_discarded(self, wizard_store: WizardStore, fake_redis) -> None:
        fake_redis.data["wizard:checkin:U1"] = "{not json"
        assert await wizard_store.get("U1") == {}

        fake_redis.data["wizard:checkin:U1"] = json.dumps(["office"])
        assert await wizard_store.get("U1") == {}
