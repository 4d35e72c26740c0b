"""
Shared JSON list persistence for typed repositories.

Every repository stores a JSON array under one storage key and decodes
its elements into domain records.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Sequence, TypeVar

from ..domain.exceptions import CorruptedDataException
from .kv_store import IKeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonListRepository:
    """Base class reading and writing JSON arrays through a key-value store."""

    def __init__(self, store: IKeyValueStore):
        """
        Initialize repository.

        Args:
            store: Key-value store holding the serialized lists
        """
        self.store = store

    async def _read_raw_list(self, key: str) -> List[Any]:
        """
        Load the JSON array stored under key.

        Returns:
            Decoded list, empty when the key is absent

        Raises:
            CorruptedDataException: If the value is not a JSON array
        """
        raw = await self.store.get(key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON under {key}: {e}")
            raise CorruptedDataException(key, f"invalid JSON: {e.msg}") from e

        if not isinstance(data, list):
            raise CorruptedDataException(key, f"expected a list, got {type(data).__name__}")

        return data

    async def _read_records(
        self, key: str, decode: Callable[[Dict[str, Any]], T]
    ) -> List[T]:
        """Load and decode a list of records."""
        records = []
        for index, entry in enumerate(await self._read_raw_list(key)):
            if not isinstance(entry, dict):
                raise CorruptedDataException(key, f"entry {index} is not an object")
            try:
                records.append(decode(entry))
            except (KeyError, TypeError, ValueError) as e:
                raise CorruptedDataException(key, f"entry {index} is malformed: {e}") from e
        return records

    async def _write_records(self, key: str, records: Sequence[Any]) -> None:
        """Serialize records (via to_dict when available) and store them."""
        payload = [r.to_dict() if hasattr(r, "to_dict") else r for r in records]
        await self.store.set(key, json.dumps(payload))
