"""Connection registry contract (protocol)."""

from collections.abc import Hashable
from typing import Protocol, TypeVar

HandleT = TypeVar("HandleT", bound=Hashable)


class ConnectionRegistryProtocol(Protocol[HandleT]):
    """Tracks live subscriber handles per park for one transport."""

    transport: str

    def register(self, park_id: str, handle: HandleT) -> int:
        """Register a handle under a park.

        Returns:
            Number of handles registered for the park after the call.
        """
        ...

    def unregister(self, park_id: str, handle: HandleT) -> bool:
        """Unregister a handle from a park.

        Returns:
            True if the handle was registered, False otherwise.
        """
        ...

    def unregister_all(self, handle: HandleT) -> list[str]:
        """Unregister a handle from every park.

        Returns:
            The park ids the handle was removed from.
        """
        ...

    def handles_for(self, park_id: str) -> frozenset[HandleT]:
        """Snapshot of the handles registered for a park."""
        ...

    def has_handles(self, park_id: str) -> bool:
        """Check whether any handle is registered for a park."""
        ...
