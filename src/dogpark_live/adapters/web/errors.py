"""Rendering of domain errors as JSON responses."""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse

from dogpark_live.domain.errors import DogParkError

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the error body shared by every endpoint."""
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


async def handle_dog_park_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error with its own status code."""
    if not isinstance(exc, DogParkError):
        return await handle_unexpected_error(request, exc)

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
        return error_response("Internal server error", exc.status_code)

    logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return error_response(exc.message, exc.status_code)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception as a 500 without leaking details."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response("Internal server error", 500)
