"""Presence service port."""

from collections.abc import Sequence
from typing import Protocol


class PresenceService(Protocol):
    """Port for checking dogs in and out of parks."""

    async def check_in(
        self, park_id: str, dog_ids: Sequence[str], requesting_user_id: str
    ) -> list[str]:
        """Add dogs to a park's roster and return the new roster."""
        ...

    async def check_out(
        self, park_id: str, dog_ids: Sequence[str], requesting_user_id: str
    ) -> list[str]:
        """Remove dogs from a park's roster and return the new roster."""
        ...
