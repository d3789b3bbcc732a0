"""Authenticated caller domain model."""

from pydantic import BaseModel, ConfigDict


class AuthenticatedUser(BaseModel):
    """Identity extracted from a verified access token."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str | None = None
