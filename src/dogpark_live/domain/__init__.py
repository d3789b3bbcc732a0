"""Domain layer - presence models, errors and interfaces."""

from dogpark_live.domain.errors import (
    AuthorizationError,
    BroadcastDeliveryError,
    DogParkError,
    NotFoundError,
    TransientIOError,
    ValidationError,
)
from dogpark_live.domain.models import Dog, DogSummary, Park, ParkUpdate
from dogpark_live.domain.ports import DogRepository, ParkRepository, TokenVerifier

__all__ = [
    "AuthorizationError",
    "BroadcastDeliveryError",
    "Dog",
    "DogParkError",
    "DogRepository",
    "DogSummary",
    "NotFoundError",
    "Park",
    "ParkRepository",
    "ParkUpdate",
    "TokenVerifier",
    "TransientIOError",
    "ValidationError",
]
