"""Rate limiting middleware for mutating HTTP requests using throttled-py."""

import logging
from typing import Any

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send
from throttled import RateLimiterType, Throttled, rate_limiter, store

from dogpark_live.adapters.web.client_info import get_client_ip_from_scope

logger = logging.getLogger(__name__)

LIMITED_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class RateLimitMiddleware:
    """Enforce a per-IP request quota on mutating HTTP requests.

    Implemented as plain ASGI middleware so long-lived event streams and
    websocket traffic pass through untouched. Only ``LIMITED_METHODS`` count
    against the quota.
    """

    def __init__(self, app: ASGIApp, requests_per_minute: int = 100) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Maximum number of mutating requests allowed per IP per minute.
        """
        self.app = app
        self.requests_per_minute = requests_per_minute
        self.rate_limiter_store = store.MemoryStore()
        self.quota: Any = None
        if requests_per_minute <= 0:
            logger.info("Rate limiting disabled")
            return
        # Each IP gets its own Throttled instance sharing this quota and store
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        logger.info(f"Rate limiting enabled: {requests_per_minute} mutating requests per minute per IP")

    def _extract_retry_after(self, result: Any) -> float:
        """Extract retry_after value from rate limit result."""
        retry_after: float = 60.0
        if hasattr(result, "state"):
            state = getattr(result, "state", None)
            if state and hasattr(state, "retry_after"):
                retry_after = float(getattr(state, "retry_after", 60.0))
        elif hasattr(result, "retry_after"):
            retry_after = float(getattr(result, "retry_after", 60.0))
        return retry_after

    def _create_rate_limit_response(self, client_ip: str, retry_after: float) -> JSONResponse:
        """Create rate limit exceeded response."""
        logger.warning(f"Rate limit exceeded for IP {client_ip}, retry after {retry_after} seconds")
        return JSONResponse(
            {"success": False, "error": "Rate limit exceeded. Please try again later."},
            status_code=429,
            headers={"Retry-After": str(max(1, int(retry_after)))},
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            self.quota is None
            or scope["type"] != "http"
            or scope.get("method", "GET").upper() not in LIMITED_METHODS
        ):
            await self.app(scope, receive, send)
            return

        client_ip = get_client_ip_from_scope(scope)
        throttle = Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.rate_limiter_store,
        )

        # limit() reports the outcome without raising
        result = throttle.limit()
        if result.limited:
            response = self._create_rate_limit_response(client_ip, self._extract_retry_after(result))
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
