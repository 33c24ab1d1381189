"""Set intent use case - rank chunks against a research intent and annotate the best ones."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from marginalia.application.dto.annotation_dto import CandidateChunk, PriorAnnotation
from marginalia.application.ports import AnnotationPipeline, EmbeddingProvider
from marginalia.application.services.embedding_ranker import EmbeddingRanker, rank
from marginalia.domain.entities import Annotation
from marginalia.domain.exceptions import NotFound, ValidationError
from marginalia.domain.value_objects import ThoroughnessLevel, parse_thoroughness

logger = logging.getLogger(__name__)


class SetIntentUseCase:
    """Store the intent, select candidate chunks by thoroughness, replace AI annotations."""

    def __init__(
        self,
        unit_of_work_factory: type,
        embedding_provider: EmbeddingProvider,
        annotation_pipeline: AnnotationPipeline,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._ranker = EmbeddingRanker(embedding_provider)
        self._pipeline = annotation_pipeline

    async def execute(
        self,
        document_id: UUID,
        intent: str,
        thoroughness: ThoroughnessLevel | str | None = ThoroughnessLevel.STANDARD,
    ) -> list[Annotation]:
        """Run the analysis. Returns the document's annotations, or [] if nothing ranked high enough."""
        if not intent or not intent.strip():
            raise ValidationError("Intent is required")
        level = parse_thoroughness(thoroughness)

        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound("Document", str(document_id))
            document.user_intent = intent
            await uow.documents.update(document)
            chunks = await uow.chunks.get_by_document_id(document_id)

        if not chunks:
            raise ValidationError("No text chunks found for analysis")

        # Provider calls run between transactions; filled embeddings commit on their own.
        intent_embedding = await self._ranker.embed_query(intent)
        embedded = await self._ranker.fill_embeddings(chunks, self._uow_factory)
        candidates = rank(embedded, intent_embedding, level)
        logger.info(
            "Document %s: %d of %d chunks selected at %s thoroughness",
            document_id,
            len(candidates),
            len(embedded),
            level,
        )
        if not candidates:
            return []

        async with self._uow_factory() as uow:
            existing = await uow.annotations.list_by_document(document_id)

        prior = [
            PriorAnnotation(
                start_position=a.start_position,
                end_position=a.end_position,
                confidence_score=a.confidence_score,
            )
            for a in existing
            if not a.is_ai_generated
        ]
        proposed = await self._pipeline.run(
            [
                CandidateChunk(id=r.chunk.id, text=r.chunk.text, start_position=r.chunk.start_position)
                for r in candidates
            ],
            intent,
            document_id,
            document.full_text,
            prior,
        )

        async with self._uow_factory() as uow:
            for annotation in existing:
                if annotation.is_ai_generated:
                    await uow.annotations.delete(annotation.id)
            now = datetime.now(UTC)
            for p in proposed:
                await uow.annotations.create(
                    Annotation(
                        id=uuid4(),
                        document_id=document_id,
                        start_position=p.absolute_start,
                        end_position=p.absolute_end,
                        highlighted_text=p.highlight_text,
                        category=p.category,
                        note=p.note,
                        is_ai_generated=True,
                        confidence_score=p.confidence,
                        created_at=now,
                    )
                )
            return await uow.annotations.list_by_document(document_id)
