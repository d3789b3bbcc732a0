"""Server-sent event stream transport."""

from dogpark_live.adapters.web.streams.park_stream import open_park_stream, park_live_stream
from dogpark_live.adapters.web.streams.stream_subscriber import (
    KEEPALIVE_FRAME,
    StreamSink,
    StreamSubscriber,
    format_sse_event,
)

__all__ = [
    "KEEPALIVE_FRAME",
    "StreamSink",
    "StreamSubscriber",
    "format_sse_event",
    "open_park_stream",
    "park_live_stream",
]
