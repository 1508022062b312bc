"""Project settings repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.models.orm.settings import ProjectSettingORM


class SettingsRepository:
    """Repository for key/value project settings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, key: str) -> str | None:
        """Get a setting value by key.

        Args:
            key: Setting key

        Returns:
            Setting value or None if not found
        """
        result = await self.session.execute(
            select(ProjectSettingORM).where(ProjectSettingORM.setting_key == key)
        )
        setting = result.scalar_one_or_none()
        return setting.setting_value if setting else None

    async def set(self, key: str, value: str, description: str | None = None) -> ProjectSettingORM:
        """Create or update a setting.

        Args:
            key: Setting key
            value: Setting value
            description: Optional human-readable description

        Returns:
            Created or updated ProjectSettingORM
        """
        result = await self.session.execute(
            select(ProjectSettingORM).where(ProjectSettingORM.setting_key == key)
        )
        existing = result.scalar_one_or_none()

        if existing:
            existing.setting_value = value
            if description is not None:
                existing.description = description
            await self.session.flush()
            await self.session.refresh(existing)
            return existing

        setting = ProjectSettingORM(setting_key=key, setting_value=value, description=description)
        self.session.add(setting)
        await self.session.flush()
        await self.session.refresh(setting)
        return setting

    async def get_all(self) -> dict[str, str]:
        """Get all settings as a key/value dict."""
        result = await self.session.execute(select(ProjectSettingORM))
        settings = result.scalars().all()
        return {s.setting_key: s.setting_value for s in settings}
