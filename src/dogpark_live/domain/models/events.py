"""Events pushed to live park subscribers."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from dogpark_live.domain.models.dog import DogSummary


class ConnectedEvent(BaseModel):
    """Acknowledgement sent to a stream subscriber right after it registers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["connected"] = "connected"
    park_id: str = Field(alias="parkId")

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire field names."""
        return self.model_dump(by_alias=True, mode="json")


class ParkUpdate(BaseModel):
    """Roster snapshot for one park.

    An empty ``dogs`` list is a real update ("no dogs"), not an absence of one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["park_update"] = "park_update"
    park_id: str = Field(alias="parkId")
    dogs: list[DogSummary] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire field names."""
        return self.model_dump(by_alias=True, mode="json")
