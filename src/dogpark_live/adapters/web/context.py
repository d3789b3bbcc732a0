"""Process-lifetime context shared by the web routes and transports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from dogpark_live.adapters.config import AppConfig
    from dogpark_live.adapters.web.broadcasters import ParkBroadcaster
    from dogpark_live.adapters.web.registry import ConnectionRegistry
    from dogpark_live.adapters.web.streams.stream_subscriber import StreamSubscriber
    from dogpark_live.domain.ports import (
        ParkService,
        PresenceService,
        RosterResolver,
        TokenVerifier,
    )


@dataclass
class WebContext:
    """Services and connection registries owned by one running application.

    Registries live here rather than at module level so that each
    application instance, and each test, has its own.
    """

    config: AppConfig
    token_verifier: TokenVerifier
    presence_service: PresenceService
    park_service: ParkService
    roster_resolver: RosterResolver
    broadcaster: ParkBroadcaster
    stream_registry: ConnectionRegistry[StreamSubscriber]
    socket_registry: ConnectionRegistry[str]


def get_context(connection: HTTPConnection) -> WebContext:
    """Get the context attached to the application serving a request."""
    context: WebContext = connection.app.state.context
    return context
