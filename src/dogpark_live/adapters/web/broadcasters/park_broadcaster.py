"""Broadcast engine for park roster updates."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dogpark_live.domain.contracts.park_broadcaster import ParkBroadcasterProtocol
from dogpark_live.domain.errors import BroadcastDeliveryError
from dogpark_live.domain.models import ParkUpdate

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dogpark_live.domain.contracts import BroadcastSinkProtocol, ConnectionRegistryProtocol
    from dogpark_live.domain.ports import RosterResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BroadcastChannel:
    """A transport sink together with the registry of its subscriber handles."""

    sink: BroadcastSinkProtocol
    registry: ConnectionRegistryProtocol[Any]

    @property
    def transport(self) -> str:
        return self.sink.transport


class ParkBroadcaster(ParkBroadcasterProtocol):
    """Pushes the current roster of a park to every subscriber on every transport.

    The roster is resolved once per broadcast and encoded once per transport.
    One failing subscriber never blocks the others.
    """

    def __init__(self, roster_resolver: RosterResolver, channels: Iterable[BroadcastChannel]) -> None:
        """Initialize the broadcaster.

        Args:
            roster_resolver: Resolves a park's roster into dog summaries.
            channels: One channel per transport.
        """
        self._roster_resolver = roster_resolver
        self._channels = list(channels)
        self._tasks: set[asyncio.Task[None]] = set()

    async def broadcast(self, park_id: str) -> None:
        """Re-read the roster of a park and push it to all of its subscribers.

        Args:
            park_id: The park to broadcast.
        """
        if not any(channel.registry.has_handles(park_id) for channel in self._channels):
            return

        try:
            dogs = await self._roster_resolver.snapshot(park_id)
        except Exception as e:
            logger.error(f"Failed to resolve roster for park {park_id}: {e}", exc_info=True)
            return

        update = ParkUpdate(park_id=park_id, dogs=dogs)
        for channel in self._channels:
            await self._deliver(channel, park_id, update)

    async def _deliver(self, channel: BroadcastChannel, park_id: str, update: ParkUpdate) -> None:
        handles = channel.registry.handles_for(park_id)
        if not handles:
            return

        payload = channel.sink.encode(update)
        logger.info(
            f"Broadcasting park update ({len(update.dogs)} dogs) to {len(handles)} "
            f"{channel.transport} subscriber(s) for park {park_id}"
        )
        for handle in handles:
            try:
                await channel.sink.send(handle, payload)
            except BroadcastDeliveryError as e:
                if channel.sink.drop_failed_handles:
                    logger.warning(
                        f"Dropping {channel.transport} subscriber for park {park_id}: {e.message}"
                    )
                    channel.registry.unregister(park_id, handle)
                else:
                    logger.warning(
                        f"Failed to deliver park update to {channel.transport} subscriber "
                        f"for park {park_id}: {e.message}"
                    )

    def schedule(self, park_id: str) -> None:
        """Run a broadcast in a detached task.

        Args:
            park_id: The park to broadcast.
        """
        task = asyncio.create_task(self._broadcast_detached(park_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _broadcast_detached(self, park_id: str) -> None:
        try:
            await self.broadcast(park_id)
        except Exception as e:
            logger.error(f"Broadcast for park {park_id} failed: {e}", exc_info=True)

    async def drain(self) -> None:
        """Wait until every scheduled broadcast has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
