"""Roster resolver port."""

from typing import Protocol

from dogpark_live.domain.models.dog import DogSummary


class RosterResolver(Protocol):
    """Port for turning a park's roster into dog summaries."""

    async def snapshot(self, park_id: str) -> list[DogSummary]:
        """Summaries of the checked-in dogs; a missing park has an empty roster."""
        ...

    async def dogs_in_park(self, park_id: str) -> list[DogSummary]:
        """Summaries of the checked-in dogs; a missing park raises NotFoundError."""
        ...
