"""Shared fixtures: a seeded in-memory store, config and token helpers."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest

from dogpark_live.adapters.auth import JwtTokenVerifier
from dogpark_live.adapters.config import AppConfig
from dogpark_live.adapters.store import InMemoryDogRepository, InMemoryParkRepository
from dogpark_live.adapters.web import WebContext
from dogpark_live.bootstrap import build_context
from dogpark_live.domain.models import Dog, Park

JWT_SECRET = "test-secret-key-long-enough-for-hs256-signing"


@pytest.fixture
def config() -> AppConfig:
    """Configuration isolated from the environment and any .env file."""
    return AppConfig(
        _env_file=None,
        jwt_secret=JWT_SECRET,
        admin_command_token="admin-token",
        stream_keepalive_seconds=0,
        rate_limit_per_minute=1000,
    )


@pytest.fixture
def parks() -> InMemoryParkRepository:
    """Store with park P1 (empty roster) and park P2 (D3 checked in)."""
    return InMemoryParkRepository(
        [
            Park(id="P1", name="Central Bark", address="1 Main St", amenities=["water"]),
            Park(id="P2", name="Bark Side", address="2 Elm St", checked_in_dogs=["D3"]),
        ]
    )


@pytest.fixture
def dogs() -> InMemoryDogRepository:
    """Store with D1 and D2 owned by U1, and D3 owned by U2."""
    return InMemoryDogRepository(
        [
            Dog(id="D1", owner_id="U1", name="Rex", breed="Beagle", age=3, emoji="🐶"),
            Dog(id="D2", owner_id="U1", name="Bella", breed="Poodle", energy_level="high"),
            Dog(id="D3", owner_id="U2", name="Max", breed="Husky", friends=["D1"]),
        ]
    )


@pytest.fixture
def token_verifier() -> JwtTokenVerifier:
    """Verifier for tokens issued by ``token_for``."""
    return JwtTokenVerifier(JWT_SECRET)


@pytest.fixture
def token_for() -> Callable[[str], str]:
    """Issue a valid access token for a user id."""

    def _issue(user_id: str) -> str:
        return jwt.encode({"userId": user_id, "email": f"{user_id}@example.com"}, JWT_SECRET, "HS256")

    return _issue


@pytest.fixture
def sio() -> MagicMock:
    """Socket.IO server double recording emits."""
    server = MagicMock()
    server.emit = AsyncMock()
    return server


@pytest.fixture
def context(
    config: AppConfig,
    parks: InMemoryParkRepository,
    dogs: InMemoryDogRepository,
    token_verifier: JwtTokenVerifier,
    sio: MagicMock,
) -> WebContext:
    """Fully wired context backed by the seeded store."""
    return build_context(config, parks, dogs, token_verifier, sio)
