"""Domain models for park presence."""

from dogpark_live.domain.models.dog import Dog, DogSummary
from dogpark_live.domain.models.events import ConnectedEvent, ParkUpdate
from dogpark_live.domain.models.park import Park
from dogpark_live.domain.models.user import AuthenticatedUser

__all__ = [
    "AuthenticatedUser",
    "ConnectedEvent",
    "Dog",
    "DogSummary",
    "Park",
    "ParkUpdate",
]
