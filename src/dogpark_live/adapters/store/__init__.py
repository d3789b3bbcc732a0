"""In-memory document store adapters."""

from dogpark_live.adapters.store.memory_document_store import (
    InMemoryDogRepository,
    InMemoryParkRepository,
)

__all__ = ["InMemoryDogRepository", "InMemoryParkRepository"]
