"""In-memory document store for parks and dogs.

Documents are deep-copied on the way in and out so that callers never alias
stored state. Every operation yields to the event loop once before touching
the documents, the way a round-trip to a remote store would, and then
completes without further suspension.
"""

import asyncio
import logging
import uuid
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Any

from dogpark_live.domain.errors import TransientIOError
from dogpark_live.domain.models import Dog, Park
from dogpark_live.domain.ports import RosterMutation

logger = logging.getLogger(__name__)


class _FailureInjection:
    """Per-operation failures, used to simulate an unavailable store."""

    def __init__(self) -> None:
        self._failures: dict[str, Exception] = {}

    def fail_on(self, operation: str, error: Exception | None = None) -> None:
        """Make every call of ``operation`` raise until ``recover`` is called."""
        self._failures[operation] = error or TransientIOError(f"Store unavailable during {operation}")

    def recover(self, operation: str | None = None) -> None:
        """Stop failing one operation, or all of them."""
        if operation is None:
            self._failures.clear()
        else:
            self._failures.pop(operation, None)

    async def _round_trip(self, operation: str) -> None:
        await asyncio.sleep(0)
        error = self._failures.get(operation)
        if error is not None:
            logger.error(f"Store operation {operation} failed: {error}")
            raise error


class InMemoryParkRepository(_FailureInjection):
    """Park documents keyed by park id."""

    def __init__(self, parks: Iterable[Park] = ()) -> None:
        """Initialize with optional pre-existing parks."""
        super().__init__()
        self._parks: dict[str, Park] = {park.id: park.model_copy(deep=True) for park in parks}

    async def get(self, park_id: str) -> Park | None:
        """Get a park by id."""
        await self._round_trip("get")
        park = self._parks.get(park_id)
        return park.model_copy(deep=True) if park is not None else None

    async def list_all(self) -> list[Park]:
        """List all parks in insertion order."""
        await self._round_trip("list_all")
        return [park.model_copy(deep=True) for park in self._parks.values()]

    async def create(self, name: str, address: str, amenities: list[str]) -> Park:
        """Create a park with a generated id."""
        await self._round_trip("create")
        now = datetime.now(UTC)
        park = Park(
            id=uuid.uuid4().hex,
            name=name,
            address=address,
            amenities=list(amenities),
            checked_in_dogs=[],
            created_at=now,
            updated_at=now,
        )
        self._parks[park.id] = park
        return park.model_copy(deep=True)

    async def put(self, park: Park) -> None:
        """Store a park document as-is."""
        await self._round_trip("put")
        self._parks[park.id] = park.model_copy(deep=True)

    async def update(self, park_id: str, changes: dict[str, Any]) -> Park | None:
        """Apply field changes and bump ``updated_at``."""
        await self._round_trip("update")
        park = self._parks.get(park_id)
        if park is None:
            return None
        updated = park.model_copy(update={**changes, "updated_at": datetime.now(UTC)}, deep=True)
        self._parks[park_id] = updated
        return updated.model_copy(deep=True)

    async def delete(self, park_id: str) -> bool:
        """Delete a park."""
        await self._round_trip("delete")
        return self._parks.pop(park_id, None) is not None

    async def update_roster(self, park_id: str, mutate: RosterMutation) -> list[str] | None:
        """Replace the roster with ``mutate(current)`` in one step.

        Nothing awaits between reading the current roster and writing the new
        one, so concurrent updates for the same park are applied in sequence.
        """
        await self._round_trip("update_roster")
        park = self._parks.get(park_id)
        if park is None:
            return None
        roster = mutate(list(park.checked_in_dogs))
        self._parks[park_id] = park.model_copy(
            update={"checked_in_dogs": list(roster), "updated_at": datetime.now(UTC)}
        )
        return list(roster)


class InMemoryDogRepository(_FailureInjection):
    """Dog documents keyed by dog id."""

    def __init__(self, dogs: Iterable[Dog] = ()) -> None:
        """Initialize with optional pre-existing dogs."""
        super().__init__()
        self._dogs: dict[str, Dog] = {dog.id: dog.model_copy(deep=True) for dog in dogs}

    async def get(self, dog_id: str) -> Dog | None:
        """Get a dog by id."""
        await self._round_trip("get")
        dog = self._dogs.get(dog_id)
        return dog.model_copy(deep=True) if dog is not None else None

    async def get_many(self, dog_ids: Sequence[str]) -> list[Dog | None]:
        """Resolve ids with one concurrent read each, preserving order."""
        return list(await asyncio.gather(*(self.get(dog_id) for dog_id in dog_ids)))

    async def put(self, dog: Dog) -> None:
        """Store a dog document as-is."""
        await self._round_trip("put")
        self._dogs[dog.id] = dog.model_copy(deep=True)

    async def delete(self, dog_id: str) -> bool:
        """Delete a dog."""
        await self._round_trip("delete")
        return self._dogs.pop(dog_id, None) is not None
