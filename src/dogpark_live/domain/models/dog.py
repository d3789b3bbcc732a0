"""Dog domain models."""

from pydantic import BaseModel, ConfigDict, Field


class DogSummary(BaseModel):
    """Lightweight view of a dog as pushed to park subscribers."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    breed: str
    age: float | None = None
    emoji: str = ""
    owner_id: str
    energy_level: str = ""
    photo_url: str = ""
    friends: list[str] = Field(default_factory=list)


class Dog(BaseModel):
    """A registered dog. Read-only for the presence subsystem."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    name: str
    breed: str
    age: float | None = None
    energy_level: str = ""
    emoji: str = ""
    photo_url: str = ""
    size: str = ""
    play_style: list[str] = Field(default_factory=list)
    friends: list[str] = Field(default_factory=list)

    def is_owned_by(self, user_id: str) -> bool:
        """Check whether the dog belongs to the given user."""
        return self.owner_id == user_id

    def summary(self) -> DogSummary:
        """Project the dog onto the roster summary fields."""
        return DogSummary(
            id=self.id,
            name=self.name,
            breed=self.breed,
            age=self.age,
            emoji=self.emoji,
            owner_id=self.owner_id,
            energy_level=self.energy_level,
            photo_url=self.photo_url,
            friends=list(self.friends),
        )
