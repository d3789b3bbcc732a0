"""Application services (use cases) for park presence."""

from dogpark_live.application.park_service import ParkService
from dogpark_live.application.presence_service import PresenceService
from dogpark_live.application.roster_resolver import RosterResolver

__all__ = ["ParkService", "PresenceService", "RosterResolver"]
