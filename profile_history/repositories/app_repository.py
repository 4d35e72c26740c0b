"""
App catalog repository.

Combines the built-in app catalog with user-defined custom apps and
per-app visibility settings.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..domain.default_apps import DEFAULT_APPS
from ..domain.entities import App, AppSetting
from ..domain.exceptions import DuplicateAppException
from .base import JsonListRepository
from .kv_store import IKeyValueStore, StorageKeys

logger = logging.getLogger(__name__)


class AppRepository(JsonListRepository):
    """Repository for custom apps and app visibility settings."""

    def __init__(self, store: IKeyValueStore, default_apps: Sequence[App] = DEFAULT_APPS):
        """
        Initialize app repository.

        Args:
            store: Key-value store
            default_apps: Built-in catalog listed before custom apps
        """
        super().__init__(store)
        self.default_apps = tuple(default_apps)

    async def get_custom_apps(self) -> List[App]:
        return await self._read_records(StorageKeys.CUSTOM_APPS, App.from_dict)

    async def add_custom_app(self, app: App) -> None:
        """
        Append a custom app.

        Raises:
            DuplicateAppException: If an app with the same value exists
        """
        custom_apps = await self.get_custom_apps()
        existing = {a.value.lower() for a in (*self.default_apps, *custom_apps)}
        if app.value.lower() in existing:
            raise DuplicateAppException(app.value)

        await self._write_records(StorageKeys.CUSTOM_APPS, [*custom_apps, app])
        logger.info(f"Added custom app: {app.value}")

    async def remove_custom_app(self, value: str) -> bool:
        """
        Remove a custom app by value.

        Returns:
            True if an app was removed
        """
        custom_apps = await self.get_custom_apps()
        remaining = [a for a in custom_apps if a.value != value]

        await self._write_records(StorageKeys.CUSTOM_APPS, remaining)
        return len(remaining) != len(custom_apps)

    async def get_app_settings(self) -> List[AppSetting]:
        return await self._read_records(StorageKeys.APP_SETTINGS, AppSetting.from_dict)

    async def update_app_settings(self, settings: Sequence[AppSetting]) -> None:
        """Replace all app visibility settings."""
        await self._write_records(StorageKeys.APP_SETTINGS, list(settings))

    async def set_app_visibility(self, value: str, visible: bool) -> None:
        """Insert or update the visibility setting of a single app."""
        settings = await self.get_app_settings()
        updated = [s for s in settings if s.value != value]
        updated.append(AppSetting(value=value, visible=visible))
        await self.update_app_settings(updated)

    async def get_all_apps_unfiltered(self) -> List[App]:
        """Default apps followed by custom apps, ignoring visibility."""
        return [*self.default_apps, *await self.get_custom_apps()]

    async def get_all_apps(self) -> List[App]:
        """
        Get visible apps.

        Apps without a settings entry are visible.
        """
        settings_map: Dict[str, AppSetting] = {
            setting.value: setting for setting in await self.get_app_settings()
        }

        visible_apps = []
        for app in await self.get_all_apps_unfiltered():
            setting = settings_map.get(app.value)
            if setting is None or setting.visible:
                visible_apps.append(app)
        return visible_apps

    async def get_app_by_value(self, value: str) -> Optional[App]:
        """Find an app by exact value, including hidden apps."""
        for app in await self.get_all_apps_unfiltered():
            if app.value == value:
                return app
        return None

    async def resolve_app(self, query: str) -> Optional[App]:
        """
        Resolve user input to a visible app.

        Matches value or display name, case-insensitively.
        """
        normalized = query.strip().lower()
        for app in await self.get_all_apps():
            if app.value.lower() == normalized or app.name.lower() == normalized:
                return app
        return None
