"""Seed data loader for parks and dogs."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from dogpark_live.domain.models import Dog, Park

if TYPE_CHECKING:
    from dogpark_live.domain.ports import DogRepository, ParkRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedData:
    """Parks and dogs parsed from a seed file."""

    parks: list[Park] = field(default_factory=list)
    dogs: list[Dog] = field(default_factory=list)

    async def apply(self, parks: "ParkRepository", dogs: "DogRepository") -> None:
        """Write all seeded records into the repositories."""
        for dog in self.dogs:
            await dogs.put(dog)
        for park in self.parks:
            await parks.put(park)
        logger.info(f"Seeded {len(self.parks)} park(s) and {len(self.dogs)} dog(s)")


class SeedDataLoader:
    """Loads parks and dogs from a TOML file.

    Expected layout::

        [[parks]]
        id = "P1"
        name = "Central Bark"
        address = "1 Main St"
        amenities = ["water", "shade"]

        [[dogs]]
        id = "D1"
        owner_id = "U1"
        name = "Rex"
        breed = "Beagle"
    """

    @staticmethod
    def load(path: str | Path) -> SeedData:
        """Load seed data from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If a record is malformed or an id is duplicated.
        """
        seed_path = Path(path)
        if not seed_path.exists():
            raise FileNotFoundError(f"Seed file not found: {seed_path}")

        with open(seed_path, "rb") as f:
            toml_data = tomllib.load(f)

        parks = [
            SeedDataLoader._parse(Park, record, "parks")
            for record in SeedDataLoader._records(toml_data, "parks")
        ]
        dogs = [
            SeedDataLoader._parse(Dog, record, "dogs")
            for record in SeedDataLoader._records(toml_data, "dogs")
        ]
        SeedDataLoader._ensure_unique([park.id for park in parks], "parks")
        SeedDataLoader._ensure_unique([dog.id for dog in dogs], "dogs")
        return SeedData(parks=parks, dogs=dogs)

    @staticmethod
    def _records(toml_data: dict[str, Any], key: str) -> list[dict[str, Any]]:
        records = toml_data.get(key, [])
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ValueError(f"Seed file '{key}' must be an array of tables")
        return records

    @staticmethod
    def _parse(model: type[Park] | type[Dog], record: dict[str, Any], key: str) -> Any:
        if not record.get("id"):
            raise ValueError(f"Every entry in '{key}' must have an 'id'")
        try:
            return model.model_validate(record)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid entry '{record['id']}' in '{key}': {e}") from e

    @staticmethod
    def _ensure_unique(ids: list[str], key: str) -> None:
        duplicates = {i for i in ids if ids.count(i) > 1}
        if duplicates:
            raise ValueError(f"Duplicate ids in '{key}': {sorted(duplicates)}")
