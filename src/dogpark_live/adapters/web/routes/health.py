"""Health check endpoint."""

from datetime import UTC, datetime

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route


async def health(_request: Request) -> JSONResponse:
    """Health check endpoint for load balancers and monitoring."""
    return JSONResponse(
        {
            "status": "OK",
            "message": "Dog park live backend is running",
            "timestamp": datetime.now(UTC).isoformat(),
        }
    )


def health_routes() -> list[Route]:
    """Health check routes."""
    return [Route("/health", health, methods=["GET"])]
