"""Client address extraction for HTTP requests, streams and socket handshakes.

These helpers never raise; when no address is available they return
``"unknown"``.
"""

from __future__ import annotations

from typing import Any

from starlette.requests import Request


def _decode_header_value(value: Any) -> str:
    """Decode a header value into a readable string."""
    if isinstance(value, bytes):
        return value.decode("latin1", errors="replace")
    return str(value)


def _first_forwarded(forwarded_for: str | None) -> str | None:
    """Return the original client from an X-Forwarded-For chain."""
    if not forwarded_for:
        return None
    first = forwarded_for.split(",")[0].strip()
    return first or None


def get_client_ip_from_scope(scope: dict[str, Any] | None) -> str:
    """Extract the client IP from an ASGI scope.

    Prefers ``X-Forwarded-For`` (first hop), then ``Fly-Client-IP``, then the
    peer address of the connection.
    """
    if not isinstance(scope, dict):
        return "unknown"

    forwarded_for: str | None = None
    fly_client_ip: str | None = None
    for name, value in scope.get("headers") or []:
        decoded_name = _decode_header_value(name).lower()
        if decoded_name == "x-forwarded-for":
            forwarded_for = _decode_header_value(value)
        elif decoded_name == "fly-client-ip":
            fly_client_ip = _decode_header_value(value)

    forwarded = _first_forwarded(forwarded_for)
    if forwarded:
        return forwarded
    if fly_client_ip:
        return fly_client_ip

    client = scope.get("client")
    if isinstance(client, (list, tuple)) and client and client[0]:
        return _decode_header_value(client[0])
    return "unknown"


def get_client_ip_from_environ(environ: dict[str, Any] | None) -> str:
    """Extract the client IP from a Socket.IO connect environ.

    python-socketio exposes the ASGI scope under ``asgi.scope``.
    """
    if not isinstance(environ, dict):
        return "unknown"
    scope = environ.get("asgi.scope")
    if isinstance(scope, dict):
        return get_client_ip_from_scope(scope)

    forwarded = _first_forwarded(environ.get("HTTP_X_FORWARDED_FOR"))
    return forwarded or environ.get("REMOTE_ADDR") or "unknown"


def extract_client_ip(request: Request) -> str:
    """Extract the client IP address from a request, supporting X-Forwarded-For."""
    forwarded = _first_forwarded(request.headers.get("X-Forwarded-For"))
    if forwarded:
        return forwarded

    if request.client and request.client.host:
        return request.client.host

    return "unknown"
