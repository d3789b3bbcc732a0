"""Dog repository port."""

from collections.abc import Sequence
from typing import Protocol

from dogpark_live.domain.models.dog import Dog


class DogRepository(Protocol):
    """Port for dog documents in the external document store."""

    async def get(self, dog_id: str) -> Dog | None:
        """Get a dog by id, or None if it does not exist."""
        ...

    async def get_many(self, dog_ids: Sequence[str]) -> list[Dog | None]:
        """Resolve several ids concurrently, preserving input order."""
        ...

    async def put(self, dog: Dog) -> None:
        """Write a dog document as-is."""
        ...

    async def delete(self, dog_id: str) -> bool:
        """Delete a dog. Returns False if it did not exist."""
        ...
