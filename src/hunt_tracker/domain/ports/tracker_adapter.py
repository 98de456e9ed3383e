"""Tracker adapter port."""

from abc import ABC, abstractmethod


class TrackerAdapter(ABC):
    """Port for the process that serves viewers and drives polling."""

    @abstractmethod
    async def start(self) -> None:
        """Start the adapter."""
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the adapter."""
        ...
