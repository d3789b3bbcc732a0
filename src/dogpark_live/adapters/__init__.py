"""Adapters layer - configuration, storage, auth and web transports."""

from dogpark_live.adapters.auth import JwtTokenVerifier
from dogpark_live.adapters.config import AppConfig
from dogpark_live.adapters.store import InMemoryDogRepository, InMemoryParkRepository

__all__ = [
    "AppConfig",
    "InMemoryDogRepository",
    "InMemoryParkRepository",
    "JwtTokenVerifier",
]
