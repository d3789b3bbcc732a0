"""Park repository port."""

from collections.abc import Callable
from typing import Any, Protocol

from dogpark_live.domain.models.park import Park

RosterMutation = Callable[[list[str]], list[str]]


class ParkRepository(Protocol):
    """Port for park documents in the external document store."""

    async def get(self, park_id: str) -> Park | None:
        """Get a park by id, or None if it does not exist."""
        ...

    async def list_all(self) -> list[Park]:
        """List all parks."""
        ...

    async def create(self, name: str, address: str, amenities: list[str]) -> Park:
        """Create a park with a store-assigned id and an empty roster."""
        ...

    async def put(self, park: Park) -> None:
        """Write a park document as-is, replacing any existing one."""
        ...

    async def update(self, park_id: str, changes: dict[str, Any]) -> Park | None:
        """Apply field changes to a park, or return None if it does not exist."""
        ...

    async def delete(self, park_id: str) -> bool:
        """Delete a park. Returns False if it did not exist."""
        ...

    async def update_roster(self, park_id: str, mutate: RosterMutation) -> list[str] | None:
        """Atomically replace the checked-in roster with ``mutate(current)``.

        Args:
            park_id: The park whose roster is updated.
            mutate: Pure function from the current roster to the new roster.

        Returns:
            The persisted roster, or None if the park does not exist.
        """
        ...
