"""In-memory persistence adapter."""

import copy
from typing import Any

from hunt_tracker.domain.ports.key_value_repository import KeyValueRepository


class InMemoryRepository(KeyValueRepository):
    """Keeps the map in process memory only."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    async def load(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    async def save(self, data: dict[str, Any]) -> None:
        self._data = copy.deepcopy(data)
        self.save_count += 1
