"""Contracts (protocols) for the presence broadcast seams."""

from dogpark_live.domain.contracts.broadcast_sink import BroadcastSinkProtocol
from dogpark_live.domain.contracts.connection_registry import ConnectionRegistryProtocol
from dogpark_live.domain.contracts.park_broadcaster import ParkBroadcasterProtocol

__all__ = [
    "BroadcastSinkProtocol",
    "ConnectionRegistryProtocol",
    "ParkBroadcasterProtocol",
]
