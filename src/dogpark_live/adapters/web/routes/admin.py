"""Admin maintenance endpoints.

Guarded by a shared secret (``ADMIN_COMMAND_TOKEN``) sent as ``X-Admin-Token``.
Meant for operational use from curl, e.g.::

    curl -X POST https://host/admin/reset-connections -H "X-Admin-Token: $ADMIN_COMMAND_TOKEN"
"""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from dogpark_live.adapters.web.context import get_context
from dogpark_live.adapters.web.errors import error_response

logger = logging.getLogger(__name__)


async def reset_connections(request: Request) -> JSONResponse:
    """Drop every live subscription on both transports.

    Stream subscribers are closed so their responses end; socket sessions stay
    connected but must send ``joinPark`` again to receive updates.
    """
    context = get_context(request)
    expected_token = context.config.admin_command_token
    if not expected_token:
        return error_response("admin endpoint disabled - ADMIN_COMMAND_TOKEN not configured", 503)

    if request.headers.get("X-Admin-Token", "") != expected_token:
        logger.warning("Unauthorized attempt to call reset_connections admin endpoint")
        return error_response("forbidden", 403)

    closed_streams = 0
    for park_id in context.stream_registry.park_ids():
        for subscriber in context.stream_registry.handles_for(park_id):
            subscriber.close()
            closed_streams += 1
    context.stream_registry.clear()
    cleared_sockets = context.socket_registry.clear()

    logger.info(
        f"Admin reset_connections completed: closed_streams={closed_streams}, "
        f"cleared_socket_registrations={cleared_sockets}"
    )
    return JSONResponse(
        {
            "success": True,
            "closed_streams": closed_streams,
            "cleared_socket_registrations": cleared_sockets,
        }
    )


def admin_routes() -> list[Route]:
    """Admin maintenance routes."""
    return [Route("/admin/reset-connections", reset_connections, methods=["POST"])]
