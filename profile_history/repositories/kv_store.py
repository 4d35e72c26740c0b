"""
Key-value store interface (Abstract Base Class).

Defines the contract for a string-keyed, string-valued persistent store
independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageKeys:
    """Storage keys shared with the launcher extension's local storage."""

    USAGE_HISTORY = "usageHistory"
    STARRED_HISTORY_ITEMS = "starredHistoryItems"
    APP_SETTINGS = "appSettings"
    CUSTOM_APPS = "customApps"


class IKeyValueStore(ABC):
    """
    Abstract key-value store.

    Values are opaque strings; callers are responsible for serialization.
    """

    backend_name: str = "unknown"

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string, or None when the key is absent

        Raises:
            StorageException: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Storage key
            value: String to store

        Raises:
            StorageException: If the backend cannot be written
        """
        pass

    async def ping(self) -> bool:
        """Report whether the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release backend resources."""
        return None
