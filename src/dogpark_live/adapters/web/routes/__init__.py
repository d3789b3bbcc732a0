"""HTTP routes."""

from dogpark_live.adapters.web.routes.admin import admin_routes
from dogpark_live.adapters.web.routes.health import health_routes
from dogpark_live.adapters.web.routes.parks import park_routes

__all__ = ["admin_routes", "health_routes", "park_routes"]
