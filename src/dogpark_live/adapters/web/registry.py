"""Connection registry: live subscriber handles per park for one transport."""

import logging
from collections.abc import Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

HandleT = TypeVar("HandleT", bound=Hashable)


class ConnectionRegistry(Generic[HandleT]):
    """Maps park ids to the set of handles subscribed to them.

    A park's handle set is created by the first registration and removed with
    the last unregistration. Nothing is persisted.
    """

    def __init__(self, transport: str) -> None:
        """Initialize an empty registry.

        Args:
            transport: Name of the transport the handles belong to, for logging.
        """
        self.transport = transport
        self._park_handles: dict[str, set[HandleT]] = {}

    def register(self, park_id: str, handle: HandleT) -> int:
        """Register a handle under a park and return the park's handle count."""
        handles = self._park_handles.setdefault(park_id, set())
        handles.add(handle)
        logger.info(
            f"Registered {self.transport} subscriber for park {park_id}. "
            f"Park subscribers: {len(handles)}, total: {self.connection_count}"
        )
        return len(handles)

    def unregister(self, park_id: str, handle: HandleT) -> bool:
        """Unregister a handle from a park. Idempotent."""
        handles = self._park_handles.get(park_id)
        if handles is None or handle not in handles:
            return False

        handles.discard(handle)
        if not handles:
            del self._park_handles[park_id]
        logger.info(
            f"Unregistered {self.transport} subscriber from park {park_id}. "
            f"Park subscribers: {len(handles)}, total: {self.connection_count}"
        )
        return True

    def unregister_all(self, handle: HandleT) -> list[str]:
        """Unregister a handle from every park it joined."""
        park_ids = [park_id for park_id, handles in self._park_handles.items() if handle in handles]
        for park_id in park_ids:
            self.unregister(park_id, handle)
        return park_ids

    def handles_for(self, park_id: str) -> frozenset[HandleT]:
        """Snapshot of a park's handles, safe to iterate while the registry changes."""
        return frozenset(self._park_handles.get(park_id, ()))

    def has_handles(self, park_id: str) -> bool:
        """Check whether any handle is registered for a park."""
        return park_id in self._park_handles

    def park_ids(self) -> list[str]:
        """Ids of the parks that currently have subscribers."""
        return list(self._park_handles)

    def clear(self) -> int:
        """Drop every registration and return how many handles were removed."""
        removed = self.connection_count
        self._park_handles.clear()
        if removed:
            logger.info(f"Cleared {removed} {self.transport} subscriber registration(s)")
        return removed

    @property
    def connection_count(self) -> int:
        """Total number of registrations across all parks."""
        return sum(len(handles) for handles in self._park_handles.values())
