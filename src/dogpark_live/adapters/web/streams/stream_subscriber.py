"""Stream subscriber handles and the event-stream broadcast sink."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import TYPE_CHECKING, Any

from dogpark_live.domain.errors import BroadcastDeliveryError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from dogpark_live.domain.models import ParkUpdate

logger = logging.getLogger(__name__)

KEEPALIVE_FRAME = ": keepalive\n\n"


def format_sse_event(payload: dict[str, Any]) -> str:
    """Format a JSON payload as a single unnamed server-sent event."""
    return f"data: {json.dumps(payload)}\n\n"


class StreamSubscriber:
    """One open event-stream response, buffered through a bounded queue.

    The broadcaster pushes frames without waiting on the network; the
    response body drains the queue. A subscriber that falls too far behind
    is treated as disconnected.
    """

    def __init__(self, park_id: str, client_ip: str = "unknown", queue_size: int = 64) -> None:
        """Initialize the subscriber.

        Args:
            park_id: The park this stream follows.
            client_ip: Client address, for logging.
            queue_size: Maximum number of undelivered frames.
        """
        self.id = uuid.uuid4().hex
        self.park_id = park_id
        self.client_ip = client_ip
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=queue_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, frame: str) -> None:
        """Queue a frame for delivery.

        Raises:
            BroadcastDeliveryError: If the subscriber is closed or its buffer is full.
                A full buffer closes the subscriber.
        """
        if self._closed:
            raise BroadcastDeliveryError(f"stream {self.id} is closed")
        try:
            self._queue.put_nowait(frame)
        except asyncio.QueueFull as e:
            self.close()
            raise BroadcastDeliveryError(f"stream {self.id} is not keeping up") from e

    def close(self) -> None:
        """Close the subscriber and wake up the response body. Idempotent."""
        if self._closed:
            return
        self._closed = True
        while True:
            try:
                self._queue.put_nowait(None)
                return
            except asyncio.QueueFull:
                self._queue.get_nowait()

    async def frames(self, keepalive_seconds: float = 0) -> AsyncIterator[str]:
        """Yield queued frames until the subscriber is closed.

        Frames queued before ``close`` are still yielded.

        Args:
            keepalive_seconds: Idle time after which a keepalive comment is
                yielded. Zero waits indefinitely.
        """
        while True:
            try:
                if keepalive_seconds > 0:
                    frame = await asyncio.wait_for(self._queue.get(), timeout=keepalive_seconds)
                else:
                    frame = await self._queue.get()
            except TimeoutError:
                yield KEEPALIVE_FRAME
                continue

            if frame is None:
                break
            yield frame

    def __repr__(self) -> str:
        return f"StreamSubscriber(id={self.id!r}, park_id={self.park_id!r}, client_ip={self.client_ip!r})"


class StreamSink:
    """Delivers park updates to event-stream subscribers."""

    transport = "stream"
    drop_failed_handles = True

    def encode(self, update: ParkUpdate) -> str:
        """Encode an update as one server-sent event frame."""
        return format_sse_event(update.to_payload())

    async def send(self, handle: StreamSubscriber, payload: str) -> None:
        """Queue the frame on the subscriber.

        Raises:
            BroadcastDeliveryError: If the subscriber cannot take the frame.
        """
        handle.push(payload)
