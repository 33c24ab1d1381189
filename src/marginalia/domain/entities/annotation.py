"""Annotation entity - highlighted span with category and note."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from marginalia.domain.value_objects import AnnotationCategory


@dataclass
class Annotation:
    """Highlight over a document, user-authored or pipeline-generated."""

    id: UUID
    document_id: UUID
    start_position: int
    end_position: int
    highlighted_text: str
    category: AnnotationCategory
    note: str
    is_ai_generated: bool
    created_at: datetime
    confidence_score: float | None = None
