"""Chunk repository port."""

from typing import Protocol
from uuid import UUID

from marginalia.domain.entities import Chunk


class ChunkRepository(Protocol):
    """Port for chunk persistence."""

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]: ...

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]: ...

    async def update_embedding(self, chunk_id: UUID, embedding: list[float]) -> None: ...
