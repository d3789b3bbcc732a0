"""Protocol for broadcasting park roster updates."""

from typing import Protocol


class ParkBroadcasterProtocol(Protocol):
    """Protocol for pushing the current roster of a park to its subscribers."""

    async def broadcast(self, park_id: str) -> None:
        """Re-read the roster of a park and push it to every subscriber.

        Args:
            park_id: The park to broadcast.
        """
        ...

    def schedule(self, park_id: str) -> None:
        """Dispatch a broadcast as a detached task without waiting for delivery.

        Args:
            park_id: The park to broadcast.
        """
        ...
