"""Broadcast sink contract (protocol)."""

from typing import Any, Protocol

from dogpark_live.domain.models.events import ParkUpdate


class BroadcastSinkProtocol(Protocol):
    """Per-transport delivery of park updates to subscriber handles."""

    transport: str
    drop_failed_handles: bool

    def encode(self, update: ParkUpdate) -> Any:
        """Serialize an update once into the transport's wire format."""
        ...

    async def send(self, handle: Any, payload: Any) -> None:
        """Deliver an encoded payload to one handle.

        Raises:
            BroadcastDeliveryError: If the handle cannot receive the payload.
        """
        ...
