"""Park management use cases."""

import logging
from typing import TYPE_CHECKING, Any

from dogpark_live.domain.errors import NotFoundError, ValidationError
from dogpark_live.domain.models import Park

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from dogpark_live.domain.contracts import ParkBroadcasterProtocol
    from dogpark_live.domain.ports import ParkRepository

EDITABLE_FIELDS = ("name", "address", "amenities")


class ParkService:
    """Create, edit and delete parks. Never touches the checked-in roster."""

    def __init__(self, parks: "ParkRepository", broadcaster: "ParkBroadcasterProtocol") -> None:
        """Initialize with the park repository and the roster broadcaster."""
        self._parks = parks
        self._broadcaster = broadcaster

    async def list_parks(self) -> list[Park]:
        """List all parks."""
        parks = await self._parks.list_all()
        logger.info(f"Dog parks loaded: {len(parks)} parks found")
        return parks

    async def create_park(self, name: str, address: str, amenities: list[str] | None = None) -> Park:
        """Create a park.

        Raises:
            ValidationError: If name or address is missing.
        """
        if not name or not address:
            raise ValidationError("Name and address are required")

        park = await self._parks.create(name=name, address=address, amenities=amenities or [])
        logger.info(f"Dog park added with ID {park.id}")
        return park

    async def update_park(self, park_id: str, changes: dict[str, Any]) -> Park:
        """Update the editable fields of a park.

        Raises:
            NotFoundError: If the park does not exist.
        """
        filtered = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        park = await self._parks.update(park_id, filtered)
        if park is None:
            raise NotFoundError("Park not found")
        logger.info(f"Dog park {park_id} updated: {sorted(filtered)}")
        return park

    async def delete_park(self, park_id: str) -> None:
        """Delete a park and tell its live subscribers the roster is now empty.

        Raises:
            NotFoundError: If the park does not exist.
        """
        if not await self._parks.delete(park_id):
            raise NotFoundError("Park not found")
        logger.info(f"Dog park {park_id} deleted")
        self._broadcaster.schedule(park_id)
