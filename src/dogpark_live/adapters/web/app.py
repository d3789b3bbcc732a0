"""Starlette and Socket.IO web adapter for the live park roster."""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, Any

import socketio
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

from dogpark_live.adapters.web.errors import handle_dog_park_error, handle_unexpected_error
from dogpark_live.adapters.web.rate_limit_middleware import RateLimitMiddleware
from dogpark_live.adapters.web.routes import admin_routes, health_routes, park_routes
from dogpark_live.adapters.web.sockets import ParkSocketAdapter
from dogpark_live.domain.errors import DogParkError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from dogpark_live.adapters.web.context import WebContext

logger = logging.getLogger(__name__)


class DogParkWebAdapter:
    """Serves the HTTP routes, event streams and Socket.IO on one ASGI app."""

    def __init__(self, context: WebContext, sio: socketio.AsyncServer) -> None:
        """Initialize the web adapter.

        Args:
            context: Services and connection registries shared by all handlers.
            sio: Socket.IO server; its handlers are attached here.
        """
        self.context = context
        self.sio = sio
        self.socket_adapter = ParkSocketAdapter(context)
        self.socket_adapter.attach(sio)
        self._server: Any | None = None

    @contextlib.asynccontextmanager
    async def _lifespan(self, _app: Starlette) -> AsyncIterator[None]:
        logger.info("Dog park live backend starting")
        try:
            yield
        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        """End every stream and wait for scheduled broadcasts to finish."""
        stream_registry = self.context.stream_registry
        for park_id in stream_registry.park_ids():
            for subscriber in stream_registry.handles_for(park_id):
                subscriber.close()
        stream_registry.clear()
        await self.context.broadcaster.drain()
        logger.info("Dog park live backend stopped")

    def build_app(self) -> Starlette:
        """Build the Starlette application serving the HTTP surface."""
        config = self.context.config
        app = Starlette(
            routes=[*health_routes(), *park_routes(), *admin_routes()],
            middleware=[
                Middleware(
                    CORSMiddleware,
                    allow_origins=config.cors_allowed_origins,
                    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                    allow_headers=["Authorization", "Content-Type", "X-Admin-Token"],
                ),
                Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute),
            ],
            exception_handlers={
                DogParkError: handle_dog_park_error,
                Exception: handle_unexpected_error,
            },
            lifespan=self._lifespan,
        )
        app.state.context = self.context
        return app

    def build_asgi_app(self) -> socketio.ASGIApp:
        """Mount Socket.IO in front of the Starlette application."""
        return socketio.ASGIApp(
            self.sio,
            other_asgi_app=self.build_app(),
            socketio_path=self.context.config.socketio_path,
        )

    async def start(self) -> None:
        """Start the web server."""
        import uvicorn

        config = uvicorn.Config(
            self.build_asgi_app(),
            host=self.context.config.host,
            port=self.context.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(config)
        logger.info(
            f"Serving on http://{self.context.config.host}:{self.context.config.port} "
            f"(socket.io path /{self.context.config.socketio_path})"
        )
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
