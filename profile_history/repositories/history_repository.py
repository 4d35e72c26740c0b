"""
Usage history repository.

Keeps the list of recently opened (profile, app) pairs, newest first,
capped at a fixed number of entries.
"""

import logging
from typing import Callable, List

from ..domain.entities import UsageHistoryItem, current_timestamp_ms
from .base import JsonListRepository
from .kv_store import IKeyValueStore, StorageKeys

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY_ITEMS = 20


class UsageHistoryRepository(JsonListRepository):
    """
    Repository for usage history entries.

    Entries are de-duplicated on the exact (profile, app) pair; starring
    uses normalized pair keys instead.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        max_items: int = DEFAULT_MAX_HISTORY_ITEMS,
        clock: Callable[[], int] = current_timestamp_ms,
    ):
        """
        Initialize history repository.

        Args:
            store: Key-value store
            max_items: Maximum number of entries kept (default: 20)
            clock: Returns the current time in milliseconds since epoch
        """
        super().__init__(store)
        if max_items < 1:
            raise ValueError("max_items must be at least 1")
        self.max_items = max_items
        self.clock = clock

    async def get_usage_history(self) -> List[UsageHistoryItem]:
        """Get usage history in stored order (newest insert first)."""
        return await self._read_records(StorageKeys.USAGE_HISTORY, UsageHistoryItem.from_dict)

    async def add_to_usage_history(
        self, profile: str, app: str, app_name: str
    ) -> UsageHistoryItem:
        """
        Record that a profile was opened on an app.

        Any existing entry for the same pair is replaced by a fresh one at
        the front of the list; the list is truncated to max_items.

        Args:
            profile: Profile handle
            app: App value/identifier
            app_name: Human-readable app name

        Returns:
            The newly inserted entry
        """
        history = await self.get_usage_history()
        remaining = [item for item in history if not item.matches(profile, app)]

        new_item = UsageHistoryItem(
            profile=profile, app=app, app_name=app_name, timestamp=self.clock()
        )
        updated = [new_item, *remaining][: self.max_items]

        await self._write_records(StorageKeys.USAGE_HISTORY, updated)

        dropped = len(remaining) + 1 - len(updated)
        if dropped:
            logger.debug(f"History truncated, dropped {dropped} oldest entries")
        logger.info(f"Recorded history entry: {app}/{profile}")
        return new_item

    async def remove_usage_history_item(self, profile: str, app: str) -> bool:
        """
        Remove a (profile, app) pair from history.

        Returns:
            True if an entry was removed
        """
        history = await self.get_usage_history()
        remaining = [item for item in history if not item.matches(profile, app)]

        await self._write_records(StorageKeys.USAGE_HISTORY, remaining)
        return len(remaining) != len(history)

    async def update_usage_history_item(
        self, old_profile: str, old_app: str, new_profile: str
    ) -> bool:
        """
        Rename a profile while keeping its app association.

        The renamed entry's timestamp is refreshed; its position is kept.

        Returns:
            True if an entry was updated
        """
        history = await self.get_usage_history()
        now = self.clock()

        updated_any = False
        updated: List[UsageHistoryItem] = []
        for item in history:
            if item.matches(old_profile, old_app):
                item = UsageHistoryItem(
                    profile=new_profile, app=item.app, app_name=item.app_name, timestamp=now
                )
                updated_any = True
            updated.append(item)

        await self._write_records(StorageKeys.USAGE_HISTORY, updated)
        return updated_any

    async def clear_usage_history(self) -> None:
        """Remove all history entries."""
        await self._write_records(StorageKeys.USAGE_HISTORY, [])
        logger.info("Cleared usage history")
