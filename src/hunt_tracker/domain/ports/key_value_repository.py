"""Key-value persistence port."""

from typing import Any, Protocol


class KeyValueRepository(Protocol):
    """Port for loading and saving a whole map at once.

    Implementations raise ``PersistenceError`` on failure.
    """

    async def load(self) -> dict[str, Any]:
        """Load the persisted map, or an empty map if nothing is stored yet."""
        ...

    async def save(self, data: dict[str, Any]) -> None:
        """Replace the persisted map."""
        ...
