"""Annotation DTOs and pipeline I/O records."""

from dataclasses import dataclass
from uuid import UUID

from marginalia.domain.value_objects import AnnotationCategory


@dataclass
class AnnotationCreateInput:
    """Input for a manually created annotation."""

    document_id: UUID
    start_position: int
    end_position: int
    highlighted_text: str
    category: AnnotationCategory
    note: str
    is_ai_generated: bool = False


@dataclass
class CandidateChunk:
    """Ranked chunk handed to the annotation pipeline."""

    id: UUID
    text: str
    start_position: int


@dataclass
class PriorAnnotation:
    """Span of an existing user annotation the pipeline must not duplicate."""

    start_position: int
    end_position: int
    confidence_score: float | None = None


@dataclass
class PipelineAnnotation:
    """Annotation proposed by the pipeline, with offsets into the full text."""

    absolute_start: int
    absolute_end: int
    highlight_text: str
    category: AnnotationCategory
    note: str
    confidence: float
