"""Broadcasters for park roster updates."""

from dogpark_live.adapters.web.broadcasters.park_broadcaster import (
    BroadcastChannel,
    ParkBroadcaster,
)

__all__ = ["BroadcastChannel", "ParkBroadcaster"]
