"""Chunk entity - position-addressed slice of a document's text."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Chunk:
    """Chunk of a document's full text.

    Offsets point into the document's full text: 0 <= start_position < end_position.
    The embedding stays None until the chunk is first ranked.
    """

    id: UUID
    document_id: UUID
    text: str
    start_position: int
    end_position: int
    embedding: list[float] | None = None
