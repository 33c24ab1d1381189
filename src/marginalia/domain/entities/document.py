"""Document entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Document:
    """Uploaded document with its extracted full text."""

    id: UUID
    filename: str
    full_text: str
    created_at: datetime
    chunk_count: int = 0
    user_intent: str | None = None
    summary: str | None = None
    main_arguments: list[str] = field(default_factory=list)
    key_concepts: list[str] = field(default_factory=list)
