"""Park and presence endpoints."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.responses import JSONResponse
from starlette.routing import Route

from dogpark_live.adapters.web.auth import authenticate_request
from dogpark_live.adapters.web.context import get_context
from dogpark_live.adapters.web.streams import park_live_stream
from dogpark_live.domain.errors import ValidationError

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)

DOG_IDS_REQUIRED = "dogIds array is required and must contain at least one dog ID"


class DogIdsRequest(BaseModel):
    """Body of check-in and check-out requests."""

    model_config = ConfigDict(populate_by_name=True)

    dog_ids: list[str] = Field(alias="dogIds", min_length=1)


class CreateParkRequest(BaseModel):
    """Body of park creation requests."""

    name: str = ""
    address: str = ""
    amenities: list[str] | None = None


class UpdateParkRequest(BaseModel):
    """Body of park update requests. Absent fields are left unchanged."""

    name: str | None = None
    address: str | None = None
    amenities: list[str] | None = None


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError("Request body must be valid JSON") from e


async def _parse_dog_ids(request: Request) -> list[str]:
    body = await _json_body(request)
    try:
        return DogIdsRequest.model_validate(body).dog_ids
    except PydanticValidationError as e:
        raise ValidationError(DOG_IDS_REQUIRED) from e


async def list_parks(request: Request) -> JSONResponse:
    """GET /parks"""
    parks = await get_context(request).park_service.list_parks()
    return JSONResponse({"success": True, "parks": [park.to_api() for park in parks]})


async def create_park(request: Request) -> JSONResponse:
    """POST /parks"""
    authenticate_request(request)
    try:
        body = CreateParkRequest.model_validate(await _json_body(request))
    except PydanticValidationError as e:
        raise ValidationError("Name and address are required") from e

    park = await get_context(request).park_service.create_park(
        body.name, body.address, body.amenities
    )
    return JSONResponse(
        {"success": True, "message": "Dog park added successfully", "park": park.to_api()},
        status_code=201,
    )


async def update_park(request: Request) -> JSONResponse:
    """PUT /parks/{park_id}"""
    authenticate_request(request)
    try:
        body = UpdateParkRequest.model_validate(await _json_body(request))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid park update: {e.error_count()} invalid field(s)") from e

    park = await get_context(request).park_service.update_park(
        request.path_params["park_id"], body.model_dump(exclude_none=True)
    )
    return JSONResponse(
        {"success": True, "message": "Dog park updated successfully", "park": park.to_api()}
    )


async def delete_park(request: Request) -> JSONResponse:
    """DELETE /parks/{park_id}"""
    authenticate_request(request)
    await get_context(request).park_service.delete_park(request.path_params["park_id"])
    return JSONResponse({"success": True, "message": "Dog park deleted successfully"})


async def check_in(request: Request) -> JSONResponse:
    """POST /parks/{park_id}/checkin"""
    user = authenticate_request(request)
    dog_ids = await _parse_dog_ids(request)
    roster = await get_context(request).presence_service.check_in(
        request.path_params["park_id"], dog_ids, user.user_id
    )
    return JSONResponse(
        {"success": True, "message": "Dogs checked in successfully", "checkedInDogs": roster}
    )


async def check_out(request: Request) -> JSONResponse:
    """POST /parks/{park_id}/checkout"""
    user = authenticate_request(request)
    dog_ids = await _parse_dog_ids(request)
    roster = await get_context(request).presence_service.check_out(
        request.path_params["park_id"], dog_ids, user.user_id
    )
    return JSONResponse(
        {"success": True, "message": "Dogs checked out successfully", "checkedInDogs": roster}
    )


async def park_dogs(request: Request) -> JSONResponse:
    """GET /parks/{park_id}/dogs"""
    authenticate_request(request)
    park_id = request.path_params["park_id"]
    dogs = await get_context(request).roster_resolver.dogs_in_park(park_id)
    logger.info(f"Found {len(dogs)} dogs checked into park {park_id}")
    return JSONResponse({"success": True, "dogs": [dog.model_dump(mode="json") for dog in dogs]})


def park_routes() -> list[Route]:
    """Routes of the park and presence HTTP surface."""
    return [
        Route("/parks", list_parks, methods=["GET"]),
        Route("/parks", create_park, methods=["POST"]),
        Route("/parks/{park_id}", update_park, methods=["PUT"]),
        Route("/parks/{park_id}", delete_park, methods=["DELETE"]),
        Route("/parks/{park_id}/checkin", check_in, methods=["POST"]),
        Route("/parks/{park_id}/checkout", check_out, methods=["POST"]),
        Route("/parks/{park_id}/dogs", park_dogs, methods=["GET"]),
        Route("/parks/{park_id}/live", park_live_stream, methods=["GET"]),
    ]
