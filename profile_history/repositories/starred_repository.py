"""
Starred pair repository.

Stores the set of starred (profile, app) pairs as a JSON list of
normalized pair keys.
"""

import logging
from typing import List

from ..domain.entities import history_pair_key
from ..domain.exceptions import CorruptedDataException
from .base import JsonListRepository
from .kv_store import StorageKeys

logger = logging.getLogger(__name__)


class StarredHistoryRepository(JsonListRepository):
    """Repository for starred history pair keys."""

    async def get_starred_pairs(self) -> List[str]:
        """
        Get all starred pair keys.

        Returns:
            Normalized keys in format: {app}::{profile}
        """
        pairs = await self._read_raw_list(StorageKeys.STARRED_HISTORY_ITEMS)
        if not all(isinstance(pair, str) for pair in pairs):
            raise CorruptedDataException(
                StorageKeys.STARRED_HISTORY_ITEMS, "pair keys must be strings"
            )
        return pairs

    async def _set_starred_pairs(self, pairs: List[str]) -> None:
        await self._write_records(StorageKeys.STARRED_HISTORY_ITEMS, pairs)

    async def is_starred(self, profile: str, app: str) -> bool:
        return history_pair_key(profile, app) in await self.get_starred_pairs()

    async def toggle_starred(self, profile: str, app: str) -> bool:
        """
        Flip the starred state of a pair.

        Returns:
            New starred state (True when starred)
        """
        pairs = await self.get_starred_pairs()
        key = history_pair_key(profile, app)

        if key in pairs:
            await self._set_starred_pairs([pair for pair in pairs if pair != key])
            logger.info(f"Unstarred {key}")
            return False

        await self._set_starred_pairs([*pairs, key])
        logger.info(f"Starred {key}")
        return True

    async def clear_starred(self) -> None:
        """Remove all starred pairs."""
        await self._set_starred_pairs([])
        logger.info("Cleared starred pairs")
