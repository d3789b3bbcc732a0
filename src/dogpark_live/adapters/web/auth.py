"""Request authentication helpers for the HTTP surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dogpark_live.adapters.web.context import get_context

if TYPE_CHECKING:
    from starlette.requests import Request

    from dogpark_live.domain.models import AuthenticatedUser


def bearer_token(request: Request) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    header = request.headers.get("Authorization", "")
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def authenticate_request(request: Request) -> AuthenticatedUser:
    """Verify the bearer token of a request.

    Raises:
        AuthorizationError: 401 when the header is missing, 403 when the token is invalid.
    """
    return get_context(request).token_verifier.verify(bearer_token(request))
