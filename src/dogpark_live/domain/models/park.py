"""Park domain model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Park(BaseModel):
    """A dog park and the ids of the dogs currently checked in.

    ``checked_in_dogs`` is an unordered set kept as a duplicate-free list. It is
    only ever written through the roster update of the park repository.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    address: str
    amenities: list[str] = Field(default_factory=list)
    checked_in_dogs: list[str] = Field(default_factory=list, alias="checkedInDogs")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("checked_in_dogs")
    @classmethod
    def drop_duplicate_dogs(cls, v: list[str]) -> list[str]:
        """Keep the first occurrence of each dog id."""
        return list(dict.fromkeys(v))

    def to_api(self) -> dict[str, Any]:
        """Serialize with the wire field names used by the HTTP surface."""
        return self.model_dump(by_alias=True, mode="json")
