"""Protocol for the poll scheduler."""

from typing import Protocol


class PollSchedulerProtocol(Protocol):
    """Protocol for driving poll cycles on a fixed interval."""

    async def start(self) -> None:
        """Start the scheduler."""
        ...

    async def stop(self) -> None:
        """Stop the scheduler."""
        ...

    async def tick(self) -> bool:
        """Run one cycle unless one is already in flight.

        Returns:
            True if a cycle ran, False if the tick was skipped.
        """
        ...
