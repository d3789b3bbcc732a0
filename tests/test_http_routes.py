"""Tests for the HTTP surface: parks, presence, health and error rendering."""

import asyncio
import json
from collections.abc import Callable, Iterator

import httpx
import pytest
from starlette.testclient import TestClient

from dogpark_live.adapters.auth import JwtTokenVerifier
from dogpark_live.adapters.config import AppConfig
from dogpark_live.adapters.store import InMemoryDogRepository, InMemoryParkRepository
from dogpark_live.adapters.web import DogParkWebAdapter
from dogpark_live.bootstrap import build_web_adapter


@pytest.fixture
def adapter(
    config: AppConfig,
    parks: InMemoryParkRepository,
    dogs: InMemoryDogRepository,
    token_verifier: JwtTokenVerifier,
) -> DogParkWebAdapter:
    return build_web_adapter(config, parks, dogs, token_verifier)


@pytest.fixture
def client(adapter: DogParkWebAdapter) -> Iterator[TestClient]:
    with TestClient(adapter.build_app()) as test_client:
        yield test_client


@pytest.fixture
def auth(token_for: Callable[[str], str]) -> Callable[[str], dict[str, str]]:
    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user_id)}"}

    return _headers


def test_health(client: TestClient) -> None:
    """Given a running app, when checking health, then OK is reported with a timestamp."""
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert "timestamp" in body


def test_list_parks_is_public(client: TestClient) -> None:
    """Given seeded parks, when listing without a token, then both parks are returned with wire names."""
    response = client.get("/parks")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [park["id"] for park in body["parks"]] == ["P1", "P2"]
    assert body["parks"][1]["checkedInDogs"] == ["D3"]


def test_check_in_returns_roster(client: TestClient, auth: Callable) -> None:
    """Given an owned dog, when checking in, then the updated roster is returned."""
    response = client.post("/parks/P1/checkin", json={"dogIds": ["D1"]}, headers=auth("U1"))

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Dogs checked in successfully",
        "checkedInDogs": ["D1"],
    }


def test_check_out_returns_roster(client: TestClient, auth: Callable) -> None:
    """Given a checked-in dog, when checking out, then it is gone from the roster."""
    client.post("/parks/P1/checkin", json={"dogIds": ["D1", "D2"]}, headers=auth("U1"))

    response = client.post("/parks/P1/checkout", json={"dogIds": ["D1"]}, headers=auth("U1"))

    assert response.status_code == 200
    assert response.json()["message"] == "Dogs checked out successfully"
    assert response.json()["checkedInDogs"] == ["D2"]


def test_missing_token_is_401(client: TestClient) -> None:
    """Given no Authorization header, when checking in, then 401 is returned."""
    response = client.post("/parks/P1/checkin", json={"dogIds": ["D1"]})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Access token required"}


def test_invalid_token_is_403(client: TestClient) -> None:
    """Given a forged token, when checking in, then 403 is returned."""
    response = client.post(
        "/parks/P1/checkin", json={"dogIds": ["D1"]}, headers={"Authorization": "Bearer forged"}
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Invalid or expired token"


@pytest.mark.parametrize("body", [{"dogIds": []}, {}, {"dogIds": "D1"}, {"dogIds": [1, None]}])
def test_malformed_dog_ids_is_400(client: TestClient, auth: Callable, body: dict) -> None:
    """Given missing or malformed dogIds, when checking in, then 400 is returned."""
    response = client.post("/parks/P1/checkin", json=body, headers=auth("U1"))

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "dogIds array is required and must contain at least one dog ID",
    }


def test_non_json_body_is_400(client: TestClient, auth: Callable) -> None:
    """Given a body that is not JSON, when checking in, then 400 is returned."""
    response = client.post("/parks/P1/checkin", content=b"dogIds=D1", headers=auth("U1"))

    assert response.status_code == 400


def test_unknown_park_is_404(client: TestClient, auth: Callable) -> None:
    """Given an unknown park, when checking in, then 404 is returned."""
    response = client.post("/parks/nope/checkin", json={"dogIds": ["D1"]}, headers=auth("U1"))

    assert response.status_code == 404
    assert response.json()["error"] == "Park not found"


def test_foreign_dog_is_403_and_roster_unchanged(client: TestClient, auth: Callable) -> None:
    """Given another user's dog, when checking in, then 403 names the dog and nothing changes."""
    response = client.post("/parks/P1/checkin", json={"dogIds": ["D1", "D3"]}, headers=auth("U1"))

    assert response.status_code == 403
    assert response.json()["error"] == "Dog with ID D3 not found or not authorized"
    assert client.get("/parks").json()["parks"][0]["checkedInDogs"] == []


def test_dogs_in_park(client: TestClient, auth: Callable) -> None:
    """Given a park with a dog, when listing its dogs, then summaries are returned."""
    response = client.get("/parks/P2/dogs", headers=auth("U1"))

    assert response.status_code == 200
    dogs = response.json()["dogs"]
    assert [dog["id"] for dog in dogs] == ["D3"]
    assert dogs[0]["owner_id"] == "U2"
    assert dogs[0]["friends"] == ["D1"]


def test_dogs_in_unknown_park_is_404(client: TestClient, auth: Callable) -> None:
    """Given an unknown park, when listing its dogs, then 404 is returned."""
    assert client.get("/parks/nope/dogs", headers=auth("U1")).status_code == 404


def test_create_update_delete_park(client: TestClient, auth: Callable) -> None:
    """Given a signed-in user, when creating, editing and deleting a park, then each step succeeds."""
    created = client.post(
        "/parks",
        json={"name": "Puppy Plaza", "address": "5 Pine St", "amenities": ["benches"]},
        headers=auth("U1"),
    )
    assert created.status_code == 201
    park = created.json()["park"]
    assert park["checkedInDogs"] == []

    updated = client.put(f"/parks/{park['id']}", json={"name": "Puppy Palace"}, headers=auth("U1"))
    assert updated.status_code == 200
    assert updated.json()["park"]["name"] == "Puppy Palace"
    assert updated.json()["park"]["address"] == "5 Pine St"

    deleted = client.delete(f"/parks/{park['id']}", headers=auth("U1"))
    assert deleted.status_code == 200
    assert client.delete(f"/parks/{park['id']}", headers=auth("U1")).status_code == 404


def test_create_park_requires_name_and_address(client: TestClient, auth: Callable) -> None:
    """Given no address, when creating a park, then 400 is returned."""
    response = client.post("/parks", json={"name": "Nowhere"}, headers=auth("U1"))

    assert response.status_code == 400
    assert response.json()["error"] == "Name and address are required"


def test_create_park_requires_auth(client: TestClient) -> None:
    """Given no token, when creating a park, then 401 is returned."""
    assert client.post("/parks", json={"name": "A", "address": "B"}).status_code == 401


@pytest.mark.parametrize(("query", "status"), [("", 401), ("?token=forged", 403)])
def test_live_stream_rejects_bad_token(
    client: TestClient, adapter: DogParkWebAdapter, query: str, status: int
) -> None:
    """Given a missing or invalid token, when opening the live stream, then it is refused as JSON."""
    response = client.get(f"/parks/P1/live{query}")

    assert response.status_code == status
    assert response.json()["success"] is False
    assert not adapter.context.stream_registry.has_handles("P1")


@pytest.mark.asyncio
async def test_live_stream_opens_with_connected_frame(
    adapter: DogParkWebAdapter, token_for: Callable[[str], str]
) -> None:
    """Given a valid token, when opening the live stream, then an event stream starts with connected."""
    registry = adapter.context.stream_registry

    async def close_once_registered() -> None:
        while not registry.has_handles("P1"):
            await asyncio.sleep(0.01)
        for subscriber in registry.handles_for("P1"):
            subscriber.close()

    transport = httpx.ASGITransport(app=adapter.build_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        request = asyncio.create_task(http.get("/parks/P1/live", params={"token": token_for("U1")}))
        await asyncio.wait_for(close_once_registered(), timeout=5)
        response = await asyncio.wait_for(request, timeout=5)
    await adapter.context.broadcaster.drain()

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["cache-control"] == "no-cache"
    assert response.headers["connection"] == "keep-alive"
    first_frame = response.text.split("\n\n")[0]
    assert first_frame.startswith("data: ")
    assert json.loads(first_frame.removeprefix("data: ")) == {"type": "connected", "parkId": "P1"}
    assert not registry.has_handles("P1")


def test_store_failure_is_500(
    client: TestClient, auth: Callable, parks: InMemoryParkRepository
) -> None:
    """Given a failing store, when checking in, then a generic 500 is returned."""
    parks.fail_on("update_roster")

    response = client.post("/parks/P1/checkin", json={"dogIds": ["D1"]}, headers=auth("U1"))

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_unexpected_error_is_500(adapter: DogParkWebAdapter, parks: InMemoryParkRepository) -> None:
    """Given an unexpected exception, when listing parks, then a generic 500 is returned."""
    parks.fail_on("list_all", RuntimeError("kaboom"))

    with TestClient(adapter.build_app(), raise_server_exceptions=False) as client:
        response = client.get("/parks")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_cors_preflight_is_answered(client: TestClient) -> None:
    """Given a browser preflight, when sent, then CORS headers allow the request."""
    response = client.options(
        "/parks/P1/checkin",
        headers={
            "Origin": "https://app.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
