"""Socket.IO transport."""

from dogpark_live.adapters.web.sockets.park_socket import (
    PARK_UPDATE_EVENT,
    ParkSocketAdapter,
    SocketSink,
    create_socket_server,
)

__all__ = ["PARK_UPDATE_EVENT", "ParkSocketAdapter", "SocketSink", "create_socket_server"]
