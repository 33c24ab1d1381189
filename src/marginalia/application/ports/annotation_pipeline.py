"""Annotation pipeline port - turns ranked chunks into categorized highlights."""

from typing import Protocol
from uuid import UUID

from marginalia.application.dto.annotation_dto import (
    CandidateChunk,
    PipelineAnnotation,
    PriorAnnotation,
)


class AnnotationPipeline(Protocol):
    """Port for the annotation generation pipeline."""

    async def run(
        self,
        chunks: list[CandidateChunk],
        intent: str,
        document_id: UUID,
        full_text: str,
        prior_annotations: list[PriorAnnotation],
    ) -> list[PipelineAnnotation]: ...
