"""Resolution of park rosters into dog summaries."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from dogpark_live.domain.errors import NotFoundError
from dogpark_live.domain.models import DogSummary

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from dogpark_live.domain.ports import DogRepository, ParkRepository


class RosterResolver:
    """Builds roster snapshots from the park and dog stores.

    Snapshots are recomputed on every call and never cached.
    """

    def __init__(self, parks: "ParkRepository", dogs: "DogRepository") -> None:
        """Initialize with the park and dog repositories."""
        self._parks = parks
        self._dogs = dogs

    async def snapshot(self, park_id: str) -> list[DogSummary]:
        """Get the summaries of the dogs checked into a park.

        A park that no longer exists has an empty roster.
        """
        park = await self._parks.get(park_id)
        if park is None:
            logger.info(f"Park {park_id} not found while building snapshot, using empty roster")
            return []
        return await self.resolve(park.checked_in_dogs)

    async def dogs_in_park(self, park_id: str) -> list[DogSummary]:
        """Like ``snapshot`` but a missing park is an error.

        Raises:
            NotFoundError: If the park does not exist.
        """
        park = await self._parks.get(park_id)
        if park is None:
            raise NotFoundError("Park not found")
        return await self.resolve(park.checked_in_dogs)

    async def resolve(self, dog_ids: Sequence[str]) -> list[DogSummary]:
        """Resolve dog ids in order, dropping ids whose dog has been deleted."""
        if not dog_ids:
            return []

        dogs = await self._dogs.get_many(dog_ids)
        summaries: list[DogSummary] = []
        for dog_id, dog in zip(dog_ids, dogs, strict=True):
            if dog is None:
                logger.debug(f"Dog with ID {dog_id} not found in database, skipping")
                continue
            summaries.append(dog.summary())
        return summaries
