"""Live park roster over server-sent events."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from starlette.responses import StreamingResponse

from dogpark_live.adapters.web.client_info import extract_client_ip
from dogpark_live.adapters.web.context import get_context
from dogpark_live.adapters.web.streams.stream_subscriber import StreamSubscriber, format_sse_event
from dogpark_live.domain.models import ConnectedEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from starlette.requests import Request

    from dogpark_live.adapters.web.context import WebContext

logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def open_park_stream(
    context: WebContext, park_id: str, token: str | None, client_ip: str = "unknown"
) -> StreamSubscriber:
    """Authenticate a stream client and register it for a park.

    The subscriber is registered, receives the ``connected`` acknowledgement
    and a broadcast is scheduled so that it gets the current roster without
    waiting for the next check-in or check-out.

    Raises:
        AuthorizationError: If the token is missing or invalid. Nothing is registered.
    """
    user = context.token_verifier.verify(token)

    subscriber = StreamSubscriber(
        park_id, client_ip=client_ip, queue_size=context.config.stream_queue_size
    )
    context.stream_registry.register(park_id, subscriber)
    logger.info(f"[{client_ip}] Stream client connected to park {park_id} as user {user.user_id}")

    subscriber.push(format_sse_event(ConnectedEvent(park_id=park_id).to_payload()))
    context.broadcaster.schedule(park_id)
    return subscriber


async def stream_park_events(
    context: WebContext, subscriber: StreamSubscriber
) -> AsyncIterator[str]:
    """Yield the subscriber's frames and unregister it when the client goes away."""
    try:
        async for frame in subscriber.frames(context.config.stream_keepalive_seconds):
            yield frame
    except asyncio.CancelledError:
        logger.debug(f"[{subscriber.client_ip}] Stream for park {subscriber.park_id} cancelled")
        raise
    finally:
        subscriber.close()
        context.stream_registry.unregister(subscriber.park_id, subscriber)
        logger.info(
            f"[{subscriber.client_ip}] Stream client disconnected from park {subscriber.park_id}"
        )


async def park_live_stream(request: Request) -> StreamingResponse:
    """GET /parks/{park_id}/live?token=<jwt>

    Token in the query string since browser event-stream clients cannot set headers.
    """
    context = get_context(request)
    park_id = request.path_params["park_id"]
    subscriber = open_park_stream(
        context,
        park_id,
        request.query_params.get("token"),
        client_ip=extract_client_ip(request),
    )
    return StreamingResponse(
        stream_park_events(context, subscriber),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )
