"""Park service port."""

from typing import Any, Protocol

from dogpark_live.domain.models.park import Park


class ParkService(Protocol):
    """Port for park management."""

    async def list_parks(self) -> list[Park]:
        """List all parks."""
        ...

    async def create_park(self, name: str, address: str, amenities: list[str] | None = None) -> Park:
        """Create a park."""
        ...

    async def update_park(self, park_id: str, changes: dict[str, Any]) -> Park:
        """Update the editable fields of a park."""
        ...

    async def delete_park(self, park_id: str) -> None:
        """Delete a park."""
        ...
