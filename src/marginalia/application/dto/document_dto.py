"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from marginalia.domain.entities import Document


@dataclass
class DocumentCreateInput:
    """Input for creating a document from extracted text."""

    filename: str
    content: str


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    filename: str
    full_text: str
    chunk_count: int
    created_at: datetime
    user_intent: str | None
    summary: str | None
    main_arguments: list[str] = field(default_factory=list)
    key_concepts: list[str] = field(default_factory=list)

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentOutput":
        return cls(
            id=document.id,
            filename=document.filename,
            full_text=document.full_text,
            chunk_count=document.chunk_count,
            created_at=document.created_at,
            user_intent=document.user_intent,
            summary=document.summary,
            main_arguments=list(document.main_arguments),
            key_concepts=list(document.key_concepts),
        )


@dataclass
class DocumentSummary:
    """Summary produced for a freshly ingested document."""

    summary: str
    main_arguments: list[str] = field(default_factory=list)
    key_concepts: list[str] = field(default_factory=list)
