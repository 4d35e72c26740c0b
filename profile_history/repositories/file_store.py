"""
JSON file implementation of the key-value store.

Persists every key in a single JSON object on disk, mirroring the layout
of the launcher's local storage. Writes replace the file atomically.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ..domain.exceptions import StorageException
from ..metrics import track_store_operation
from .kv_store import IKeyValueStore

logger = logging.getLogger(__name__)


class FileKeyValueStore(IKeyValueStore):
    """
    Key-value store backed by one JSON document.

    A missing file is treated as an empty store and created on first write.
    """

    backend_name = "file"

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file store.

        Args:
            path: Location of the JSON document
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[str]:
        try:
            document = await asyncio.to_thread(self._load)
        except StorageException:
            track_store_operation(self.backend_name, "get", success=False)
            raise

        track_store_operation(self.backend_name, "get", success=True)
        return document.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            try:
                document = await asyncio.to_thread(self._load)
                document[key] = value
                await asyncio.to_thread(self._dump, document)
            except StorageException:
                track_store_operation(self.backend_name, "set", success=False)
                raise

        track_store_operation(self.backend_name, "set", success=True)
        logger.debug(f"Saved to {self.path}: {key}")

    async def ping(self) -> bool:
        try:
            await asyncio.to_thread(self._load)
            return True
        except StorageException:
            return False

    def _load(self) -> Dict[str, str]:
        """Read the whole document, an empty dict when the file is missing."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading store file {self.path}: {e}")
            raise StorageException("read", str(e)) from e

        if not isinstance(document, dict):
            raise StorageException("read", f"{self.path} does not contain a JSON object")

        invalid = sorted(k for k, v in document.items() if not isinstance(v, str))
        if invalid:
            raise StorageException(
                "read", f"{self.path} has non-string values for keys: {', '.join(invalid)}"
            )

        return document

    def _dump(self, document: Dict[str, str]) -> None:
        """Write the document to a temp file and atomically replace the target."""
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Error writing store file {self.path}: {e}")
            raise StorageException("write", str(e)) from e
