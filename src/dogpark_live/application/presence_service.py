"""Presence mutator: check dogs in and out of parks."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from dogpark_live.domain.errors import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from dogpark_live.domain.contracts import ParkBroadcasterProtocol
    from dogpark_live.domain.ports import DogRepository, ParkRepository, RosterMutation

DOG_IDS_REQUIRED = "dogIds array is required and must contain at least one dog ID"


def union_roster(current: list[str], dog_ids: Sequence[str]) -> list[str]:
    """Add ids to a roster, keeping existing order and skipping duplicates."""
    return list(dict.fromkeys([*current, *dog_ids]))


def subtract_roster(current: list[str], dog_ids: Sequence[str]) -> list[str]:
    """Remove ids from a roster. Ids not present are ignored."""
    removed = set(dog_ids)
    return [dog_id for dog_id in current if dog_id not in removed]


class PresenceService:
    """Sole writer of park rosters.

    Validation and ownership checks run before any write, so a rejected request
    has no side effect. A successful write schedules a broadcast for the park;
    delivery problems never fail the mutation.
    """

    def __init__(
        self,
        parks: "ParkRepository",
        dogs: "DogRepository",
        broadcaster: "ParkBroadcasterProtocol",
    ) -> None:
        """Initialize the presence service.

        Args:
            parks: Repository holding the park rosters.
            dogs: Repository used to verify dog ownership.
            broadcaster: Broadcaster notified after each successful write.
        """
        self._parks = parks
        self._dogs = dogs
        self._broadcaster = broadcaster

    async def check_in(
        self, park_id: str, dog_ids: Sequence[str], requesting_user_id: str
    ) -> list[str]:
        """Check dogs into a park.

        Re-checking in a dog that is already present is a no-op for that dog.

        Args:
            park_id: The park to check into.
            dog_ids: Ids of the dogs to add. Must be non-empty.
            requesting_user_id: The user performing the request; must own every dog.

        Returns:
            The park's roster after the update.

        Raises:
            ValidationError: If ``dog_ids`` is empty.
            NotFoundError: If the park does not exist.
            AuthorizationError: If any dog is missing or owned by someone else.
            TransientIOError: If the store fails.
        """
        logger.info(f"Checking in dogs to park {park_id}: {list(dog_ids)}")
        roster = await self._mutate(
            park_id, dog_ids, requesting_user_id, lambda current: union_roster(current, dog_ids)
        )
        logger.info(f"Dogs checked in successfully at park {park_id}, roster size {len(roster)}")
        return roster

    async def check_out(
        self, park_id: str, dog_ids: Sequence[str], requesting_user_id: str
    ) -> list[str]:
        """Check dogs out of a park.

        Checking out a dog that is not present is a no-op for that dog. Errors
        are the same as for ``check_in``.
        """
        logger.info(f"Checking out dogs from park {park_id}: {list(dog_ids)}")
        roster = await self._mutate(
            park_id, dog_ids, requesting_user_id, lambda current: subtract_roster(current, dog_ids)
        )
        logger.info(f"Dogs checked out successfully from park {park_id}, roster size {len(roster)}")
        return roster

    async def _mutate(
        self,
        park_id: str,
        dog_ids: Sequence[str],
        requesting_user_id: str,
        mutate: "RosterMutation",
    ) -> list[str]:
        if not dog_ids:
            raise ValidationError(DOG_IDS_REQUIRED)

        park = await self._parks.get(park_id)
        if park is None:
            raise NotFoundError("Park not found")

        await self._verify_ownership(dog_ids, requesting_user_id)

        roster = await self._parks.update_roster(park_id, mutate)
        if roster is None:
            # Deleted between the existence check and the write.
            raise NotFoundError("Park not found")

        self._broadcaster.schedule(park_id)
        return roster

    async def _verify_ownership(self, dog_ids: Sequence[str], user_id: str) -> None:
        """Ensure every dog exists and belongs to the user, naming the first offender."""
        dogs = await self._dogs.get_many(dog_ids)
        for dog_id, dog in zip(dog_ids, dogs, strict=True):
            if dog is None or not dog.is_owned_by(user_id):
                logger.warning(f"User {user_id} may not move dog {dog_id}")
                raise AuthorizationError(f"Dog with ID {dog_id} not found or not authorized")
