"""Tests for the seed data loader."""

from pathlib import Path

import pytest

from dogpark_live.adapters.config import SeedDataLoader
from dogpark_live.adapters.store import InMemoryDogRepository, InMemoryParkRepository

SEED_TOML = """
[[parks]]
id = "P1"
name = "Central Bark"
address = "1 Main St"
amenities = ["water", "shade"]
checkedInDogs = ["D1"]

[[parks]]
id = "P2"
name = "Bark Side"
address = "2 Elm St"

[[dogs]]
id = "D1"
owner_id = "U1"
name = "Rex"
breed = "Beagle"
age = 3
play_style = ["fetch"]
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "seed.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_parses_parks_and_dogs(tmp_path: Path) -> None:
    """Given a valid seed file, when loading, then parks and dogs are parsed."""
    seed = SeedDataLoader.load(_write(tmp_path, SEED_TOML))

    assert [park.id for park in seed.parks] == ["P1", "P2"]
    assert seed.parks[0].amenities == ["water", "shade"]
    assert seed.parks[0].checked_in_dogs == ["D1"]
    assert seed.parks[1].checked_in_dogs == []
    assert len(seed.dogs) == 1
    assert seed.dogs[0].owner_id == "U1"
    assert seed.dogs[0].play_style == ["fetch"]


@pytest.mark.asyncio
async def test_apply_writes_records_into_repositories(tmp_path: Path) -> None:
    """Given loaded seed data, when applying it, then the repositories contain every record."""
    seed = SeedDataLoader.load(_write(tmp_path, SEED_TOML))
    parks = InMemoryParkRepository()
    dogs = InMemoryDogRepository()

    await seed.apply(parks, dogs)

    park = await parks.get("P1")
    assert park is not None
    assert park.checked_in_dogs == ["D1"]
    assert await dogs.get("D1") is not None
    assert len(await parks.list_all()) == 2


def test_load_drops_duplicate_checked_in_dogs(tmp_path: Path) -> None:
    """Given a seeded roster listing a dog twice, when loading, then the dog is checked in once."""
    seed = SeedDataLoader.load(
        _write(
            tmp_path,
            '''
[[parks]]
id = "P1"
name = "Central Bark"
address = "1 Main St"
checkedInDogs = ["D1", "D2", "D1"]
''',
        )
    )

    assert seed.parks[0].checked_in_dogs == ["D1", "D2"]


def test_load_missing_file_raises(tmp_path: Path) -> None:
    """Given a path that does not exist, when loading, then FileNotFoundError is raised."""
    with pytest.raises(FileNotFoundError, match="Seed file not found"):
        SeedDataLoader.load(tmp_path / "missing.toml")


def test_load_rejects_record_without_id(tmp_path: Path) -> None:
    """Given a park without id, when loading, then ValueError names the section."""
    path = _write(tmp_path, '[[parks]]\nname = "Nameless"\naddress = "3 Oak St"\n')

    with pytest.raises(ValueError, match="Every entry in 'parks' must have an 'id'"):
        SeedDataLoader.load(path)


def test_load_rejects_invalid_record(tmp_path: Path) -> None:
    """Given a dog missing required fields, when loading, then ValueError names the record."""
    path = _write(tmp_path, '[[dogs]]\nid = "D9"\nname = "Ghost"\n')

    with pytest.raises(ValueError, match="Invalid entry 'D9' in 'dogs'"):
        SeedDataLoader.load(path)


def test_load_rejects_duplicate_ids(tmp_path: Path) -> None:
    """Given two parks with the same id, when loading, then ValueError lists the duplicate."""
    path = _write(
        tmp_path,
        '[[parks]]\nid = "P1"\nname = "A"\naddress = "a"\n\n'
        '[[parks]]\nid = "P1"\nname = "B"\naddress = "b"\n',
    )

    with pytest.raises(ValueError, match="Duplicate ids in 'parks'"):
        SeedDataLoader.load(path)


def test_load_rejects_section_that_is_not_an_array(tmp_path: Path) -> None:
    """Given a [parks] table instead of [[parks]], when loading, then ValueError is raised."""
    path = _write(tmp_path, '[parks]\nid = "P1"\n')

    with pytest.raises(ValueError, match="must be an array of tables"):
        SeedDataLoader.load(path)
