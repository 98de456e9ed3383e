"""JSON file persistence adapter."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from hunt_tracker.domain.errors import PersistenceError
from hunt_tracker.domain.ports.key_value_repository import KeyValueRepository

logger = logging.getLogger(__name__)


class JsonFileRepository(KeyValueRepository):
    """Stores a map as one JSON object in a file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def load(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._read)

    async def save(self, data: dict[str, Any]) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write, data)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.info(f"No persisted data at {self.path}, starting empty")
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Expected a JSON object in {self.path}")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e
