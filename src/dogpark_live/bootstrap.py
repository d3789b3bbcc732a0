"""Composition root wiring services, registries and transports together."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dogpark_live.adapters.web import DogParkWebAdapter, WebContext
from dogpark_live.adapters.web.broadcasters import BroadcastChannel, ParkBroadcaster
from dogpark_live.adapters.web.registry import ConnectionRegistry
from dogpark_live.adapters.web.sockets import SocketSink, create_socket_server
from dogpark_live.adapters.web.streams import StreamSink, StreamSubscriber
from dogpark_live.application import ParkService, PresenceService, RosterResolver

if TYPE_CHECKING:
    import socketio

    from dogpark_live.adapters.config import AppConfig
    from dogpark_live.domain.ports import DogRepository, ParkRepository, TokenVerifier


def build_context(
    config: AppConfig,
    parks: ParkRepository,
    dogs: DogRepository,
    token_verifier: TokenVerifier,
    sio: socketio.AsyncServer,
) -> WebContext:
    """Create the services and connection registries for one application.

    Args:
        config: Application configuration.
        parks: Park document store.
        dogs: Dog document store.
        token_verifier: Access token verifier used by HTTP, streams and sockets.
        sio: Socket.IO server that socket broadcasts are emitted through.

    Returns:
        A fully wired context. Both registries start empty.
    """
    stream_registry: ConnectionRegistry[StreamSubscriber] = ConnectionRegistry("stream")
    socket_registry: ConnectionRegistry[str] = ConnectionRegistry("socket")

    roster_resolver = RosterResolver(parks, dogs)
    broadcaster = ParkBroadcaster(
        roster_resolver,
        [
            BroadcastChannel(StreamSink(), stream_registry),
            BroadcastChannel(SocketSink(sio), socket_registry),
        ],
    )

    return WebContext(
        config=config,
        token_verifier=token_verifier,
        presence_service=PresenceService(parks, dogs, broadcaster),
        park_service=ParkService(parks, broadcaster),
        roster_resolver=roster_resolver,
        broadcaster=broadcaster,
        stream_registry=stream_registry,
        socket_registry=socket_registry,
    )


def build_web_adapter(
    config: AppConfig,
    parks: ParkRepository,
    dogs: DogRepository,
    token_verifier: TokenVerifier,
) -> DogParkWebAdapter:
    """Create the web adapter serving HTTP, event streams and Socket.IO."""
    sio = create_socket_server(config)
    context = build_context(config, parks, dogs, token_verifier, sio)
    return DogParkWebAdapter(context, sio)
