"""Ports (interfaces) for the ports-and-adapters architecture."""

from dogpark_live.domain.ports.dog_repository import DogRepository
from dogpark_live.domain.ports.park_repository import ParkRepository, RosterMutation
from dogpark_live.domain.ports.park_service import ParkService
from dogpark_live.domain.ports.presence_service import PresenceService
from dogpark_live.domain.ports.roster_resolver import RosterResolver
from dogpark_live.domain.ports.token_verifier import TokenVerifier

__all__ = [
    "DogRepository",
    "ParkRepository",
    "ParkService",
    "PresenceService",
    "RosterMutation",
    "RosterResolver",
    "TokenVerifier",
]
