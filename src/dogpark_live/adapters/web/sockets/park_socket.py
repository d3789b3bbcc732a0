"""Live park roster over Socket.IO.

Protocol:
- client -> server: ``joinPark(parkId)``, ``leavePark(parkId)``
- server -> client: ``parkUpdate({type: "park_update", parkId, dogs})``

A session may join several park rooms at once. Auth, when required, is
``query.token`` or ``auth.token`` on the handshake.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs

import socketio
import socketio.exceptions

from dogpark_live.adapters.web.client_info import get_client_ip_from_environ
from dogpark_live.domain.errors import AuthorizationError, BroadcastDeliveryError

if TYPE_CHECKING:
    from dogpark_live.adapters.config import AppConfig
    from dogpark_live.adapters.web.context import WebContext
    from dogpark_live.domain.models import ParkUpdate

logger = logging.getLogger(__name__)

PARK_UPDATE_EVENT = "parkUpdate"


def create_socket_server(config: AppConfig) -> socketio.AsyncServer:
    """Create the Socket.IO server for the ASGI application."""
    origins: str | list[str] = config.cors_allowed_origins
    if origins == ["*"]:
        origins = "*"
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=origins,
        logger=False,
        engineio_logger=False,
    )


def extract_token(environ: dict[str, Any] | None, auth: Any | None) -> str | None:
    """Extract the access token from the handshake query string or auth payload."""
    scope: Any = environ
    if isinstance(environ, dict) and isinstance(environ.get("asgi.scope"), dict):
        scope = environ["asgi.scope"]

    query_string: str | bytes = ""
    if isinstance(scope, dict):
        query_string = scope.get("query_string") or scope.get("QUERY_STRING") or ""
    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


class SocketSink:
    """Delivers park updates to Socket.IO sessions.

    Failures are logged by the broadcaster; the session stays registered
    until it leaves or disconnects.
    """

    transport = "socket"
    drop_failed_handles = False

    def __init__(self, sio: socketio.AsyncServer) -> None:
        """Initialize with the Socket.IO server used to emit."""
        self._sio = sio

    def encode(self, update: ParkUpdate) -> dict[str, Any]:
        """Encode an update as the ``parkUpdate`` event payload."""
        return update.to_payload()

    async def send(self, handle: str, payload: dict[str, Any]) -> None:
        """Emit ``parkUpdate`` to one session.

        Raises:
            BroadcastDeliveryError: If the emit fails.
        """
        try:
            await self._sio.emit(PARK_UPDATE_EVENT, payload, to=handle)
        except Exception as e:
            raise BroadcastDeliveryError(f"emit to session {handle} failed: {e}") from e


class ParkSocketAdapter:
    """Socket.IO event handlers for joining and leaving park rooms."""

    def __init__(self, context: WebContext) -> None:
        """Initialize with the application context."""
        self._context = context

    def attach(self, sio: socketio.AsyncServer) -> None:
        """Register the handlers on a Socket.IO server."""
        sio.on("connect", self.on_connect)
        sio.on("disconnect", self.on_disconnect)
        sio.on("joinPark", self.on_join_park)
        sio.on("leavePark", self.on_leave_park)

    async def on_connect(self, sid: str, environ: dict[str, Any], auth: Any | None = None) -> None:
        """Accept a session, verifying its token when the config requires one.

        Raises:
            socketio.exceptions.ConnectionRefusedError: If auth is required and the token is missing or invalid.
        """
        client_ip = get_client_ip_from_environ(environ)
        if self._context.config.socket_require_auth:
            try:
                user = self._context.token_verifier.verify(extract_token(environ, auth))
            except AuthorizationError as e:
                logger.warning(f"[{client_ip}] Refusing socket {sid}: {e.message}")
                raise socketio.exceptions.ConnectionRefusedError("unauthorized") from e
            logger.info(f"[{client_ip}] New socket connection {sid} for user {user.user_id}")
        else:
            logger.info(f"[{client_ip}] New socket connection {sid}")

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        """Remove the session from every park room it joined."""
        park_ids = self._context.socket_registry.unregister_all(sid)
        logger.info(f"Socket {sid} disconnected ({reason}), left {len(park_ids)} park(s)")

    async def on_join_park(self, sid: str, park_id: Any) -> None:
        """Join a park room and push the current roster."""
        if not self._valid_park_id(sid, "joinPark", park_id):
            return
        logger.info(f"Socket {sid} joining park {park_id}")
        self._context.socket_registry.register(park_id, sid)
        self._context.broadcaster.schedule(park_id)

    async def on_leave_park(self, sid: str, park_id: Any) -> None:
        """Leave a park room."""
        if not self._valid_park_id(sid, "leavePark", park_id):
            return
        logger.info(f"Socket {sid} leaving park {park_id}")
        self._context.socket_registry.unregister(park_id, sid)

    @staticmethod
    def _valid_park_id(sid: str, event: str, park_id: Any) -> bool:
        if isinstance(park_id, str) and park_id:
            return True
        logger.warning(f"Socket {sid} sent {event} with invalid park id: {park_id!r}")
        return False
