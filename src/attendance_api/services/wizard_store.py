"""Short-lived per-user state for the multi-step check-in wizard."""

import json
import logging

import redis.asyncio as redis

from attendance_api.config import get_settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "wizard:checkin"


class WizardStore:
    """Redis-backed map of chat user id to partial check-in selections.

    Entries expire after a TTL, so abandoned wizards do not accumulate.
    Losing an entry only makes the user restart ``/checkin``.
    """

    _instance: "WizardStore | None" = None

    def __init__(self, client: redis.Redis, ttl_seconds: int) -> None:
        """Initialize store.

        Args:
            client: Redis client created with ``decode_responses=True``
            ttl_seconds: Lifetime of an entry after its last update
        """
        self.client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def get_instance(cls) -> "WizardStore":
        """Get or create the shared store.

        Returns:
            WizardStore singleton instance
        """
        if cls._instance is None:
            settings = get_settings()
            client = redis.from_url(
                str(settings.redis_url),
                encoding="utf-8",
                decode_responses=True,
            )
            cls._instance = WizardStore(client, settings.wizard_ttl_seconds)
        return cls._instance

    @classmethod
    async def close(cls) -> None:
        """Close the shared Redis connection."""
        if cls._instance is not None:
            await cls._instance.client.aclose()
            cls._instance = None

    def _key(self, user_id: str) -> str:
        return f"{KEY_PREFIX}:{user_id}"

    async def get(self, user_id: str) -> dict[str, str]:
        """Get the selections of a user (empty if none or expired)."""
        raw = await self.client.get(self._key(user_id))
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable wizard state for %s", user_id)
            return {}
        return data if isinstance(data, dict) else {}

    async def update(self, user_id: str, **selections: str) -> dict[str, str]:
        """Merge selections into a user's state and restart its TTL.

        Returns:
            The merged selections
        """
        data = await self.get(user_id)
        data.update(selections)
        await self.client.setex(self._key(user_id), self.ttl_seconds, json.dumps(data))
        return data

    async def reset(self, user_id: str) -> None:
        """Start a fresh, empty wizard for a user."""
        await self.client.setex(self._key(user_id), self.ttl_seconds, json.dumps({}))

    async def clear(self, user_id: str) -> None:
        """Drop a user's state after a completed check-in."""
        await self.client.delete(self._key(user_id))
