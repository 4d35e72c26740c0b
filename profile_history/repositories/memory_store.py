"""
In-memory key-value store.

Process-local backend used for development and tests. Contents are lost
when the process exits.
"""

import logging
from typing import Dict, Optional

from .kv_store import IKeyValueStore

logger = logging.getLogger(__name__)


class MemoryKeyValueStore(IKeyValueStore):
    """
    Dict-backed key-value store.

    Attributes:
        data: Stored values keyed by storage key
    """

    backend_name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        logger.info(f"Initialized MemoryKeyValueStore with {len(self.data)} keys")

    async def get(self, key: str) -> Optional[str]:
        value = self.data.get(key)
        logger.debug(f"Store {'HIT' if value is not None else 'MISS'}: {key}")
        return value

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value
        logger.debug(f"Stored: {key} ({len(value)} chars)")

    def clear(self) -> None:
        """Remove all keys."""
        count = len(self.data)
        self.data.clear()
        logger.info(f"Cleared {count} keys from memory store")
