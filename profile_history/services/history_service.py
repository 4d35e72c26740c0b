"""
Business logic service layer.

Orchestrates history, starring and app catalog repositories to answer
recency queries and apply user actions.
"""

from typing import List, Optional

import structlog

from ..domain.entities import App, AppSetting, UsageHistoryItem
from ..domain.exceptions import AppNotFoundException, ValidationException
from ..domain.queries import recent, validate_limit
from ..metrics import track_history_operation
from ..repositories.app_repository import AppRepository
from ..repositories.history_repository import UsageHistoryRepository
from ..repositories.starred_repository import StarredHistoryRepository

logger = structlog.get_logger(__name__)

DEFAULT_QUERY_LIMIT = 10


def _require(field: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValidationException(field, value, f"{field} cannot be empty")
    return value


class ProfileHistoryService:
    """
    Profile history service.

    Provides the operations behind the history views:
    - recent profiles, optionally per app
    - starred profiles, optionally per app
    - recording, renaming and forgetting opened profiles
    - starring and unstarring pairs
    """

    def __init__(
        self,
        history_repo: UsageHistoryRepository,
        starred_repo: StarredHistoryRepository,
        app_repo: AppRepository,
        default_limit: int = DEFAULT_QUERY_LIMIT,
    ):
        """
        Initialize history service.

        Args:
            history_repo: Usage history repository
            starred_repo: Starred pair repository
            app_repo: App catalog repository
            default_limit: Number of items returned when no limit is given
        """
        self.history_repo = history_repo
        self.starred_repo = starred_repo
        self.app_repo = app_repo
        self.default_limit = default_limit

    async def get_usage_history(self) -> List[UsageHistoryItem]:
        return await self.history_repo.get_usage_history()

    async def get_recent_profiles(
        self, app: Optional[str] = None, limit: Optional[int] = None
    ) -> List[UsageHistoryItem]:
        """
        Get recently opened profiles.

        Args:
            app: Optional app value or name fragment to filter by
            limit: Maximum number of results (default: service default)

        Returns:
            History items, most recent first

        Raises:
            ValidationException: If limit is negative
        """
        limit = self.default_limit if limit is None else limit
        validate_limit(limit)

        history = await self.history_repo.get_usage_history()
        items = recent(history, app=app, limit=limit)

        logger.debug("Recent profiles query", app=app, limit=limit, results=len(items))
        return items

    async def get_starred_profiles(
        self, app: Optional[str] = None, limit: Optional[int] = None
    ) -> List[UsageHistoryItem]:
        """
        Get starred history items.

        Args:
            app: Optional app value or name fragment to filter by
            limit: Maximum number of results, None for all

        Returns:
            Starred history items, most recent first
        """
        validate_limit(limit)

        history = await self.history_repo.get_usage_history()
        starred = set(await self.starred_repo.get_starred_pairs())

        starred_items = [item for item in history if item.pair_key in starred]
        items = recent(starred_items, app=app, limit=limit)

        logger.debug("Starred profiles query", app=app, limit=limit, results=len(items))
        return items

    async def record_profile_open(
        self, profile: str, app: str, app_name: Optional[str] = None
    ) -> UsageHistoryItem:
        """
        Record that a profile was opened on an app.

        Args:
            profile: Profile handle
            app: App value/identifier
            app_name: Display name; looked up in the catalog when omitted,
                falling back to the app value for unknown apps

        Raises:
            ValidationException: If profile or app is empty
        """
        _require("profile", profile)
        _require("app", app)

        if not app_name:
            catalog_app = await self.app_repo.get_app_by_value(app)
            app_name = catalog_app.name if catalog_app else app

        item = await self.history_repo.add_to_usage_history(profile.strip(), app, app_name)
        track_history_operation("record")
        logger.info("Profile opened", profile=item.profile, app=app)
        return item

    async def rename_profile(self, old_profile: str, app: str, new_profile: str) -> bool:
        """Rename a profile in history, keeping its app association."""
        _require("new_profile", new_profile)

        updated = await self.history_repo.update_usage_history_item(
            old_profile, app, new_profile.strip()
        )
        if updated:
            track_history_operation("rename")
            logger.info("Profile renamed", old_profile=old_profile, new_profile=new_profile, app=app)
        return updated

    async def forget_profile(self, profile: str, app: str) -> bool:
        """Remove a (profile, app) pair from history."""
        removed = await self.history_repo.remove_usage_history_item(profile, app)
        if removed:
            track_history_operation("remove")
        return removed

    async def clear_history(self) -> None:
        await self.history_repo.clear_usage_history()
        track_history_operation("clear")

    async def is_starred(self, profile: str, app: str) -> bool:
        return await self.starred_repo.is_starred(profile, app)

    async def toggle_star(self, profile: str, app: str) -> bool:
        """
        Toggle the starred state of a pair.

        Returns:
            New starred state
        """
        _require("profile", profile)
        _require("app", app)

        starred = await self.starred_repo.toggle_starred(profile, app)
        track_history_operation("star" if starred else "unstar")
        return starred

    async def star_profile(self, profile: str, app: str) -> bool:
        """
        Star a pair.

        Returns:
            True if the pair was newly starred, False if already starred
        """
        if await self.is_starred(profile, app):
            return False
        return await self.toggle_star(profile, app)

    async def unstar_profile(self, profile: str, app: str) -> bool:
        """
        Unstar a pair.

        Returns:
            True if the pair was starred before, False otherwise
        """
        if not await self.is_starred(profile, app):
            return False
        return not await self.toggle_star(profile, app)

    async def clear_starred(self) -> None:
        await self.starred_repo.clear_starred()
        track_history_operation("clear_starred")

    async def list_apps(self, include_hidden: bool = False) -> List[App]:
        """
        List catalog apps.

        Args:
            include_hidden: Ignore visibility settings

        Returns:
            Default apps followed by custom apps
        """
        if include_hidden:
            return await self.app_repo.get_all_apps_unfiltered()
        return await self.app_repo.get_all_apps()

    async def resolve_app(self, query: str) -> Optional[App]:
        return await self.app_repo.resolve_app(query)

    async def add_custom_app(self, app: App) -> App:
        """
        Add a user-defined app to the catalog.

        Raises:
            DuplicateAppException: If the value is already taken
        """
        await self.app_repo.add_custom_app(app)
        logger.info("Custom app added", app=app.value)
        return app

    async def remove_custom_app(self, value: str) -> None:
        """
        Remove a user-defined app.

        Raises:
            AppNotFoundException: If no custom app has this value
        """
        if not await self.app_repo.remove_custom_app(value):
            raise AppNotFoundException(value)
        logger.info("Custom app removed", app=value)

    async def get_app_settings(self) -> List[AppSetting]:
        return await self.app_repo.get_app_settings()

    async def update_app_settings(self, settings: List[AppSetting]) -> None:
        await self.app_repo.update_app_settings(settings)

    async def set_app_visibility(self, value: str, visible: bool) -> AppSetting:
        """
        Show or hide a catalog app.

        Raises:
            AppNotFoundException: If the app is not in the catalog
        """
        if await self.app_repo.get_app_by_value(value) is None:
            raise AppNotFoundException(value)
        await self.app_repo.set_app_visibility(value, visible)
        return AppSetting(value=value, visible=visible)
