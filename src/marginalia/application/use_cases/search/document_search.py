"""Document search use case - semantic search inside one document."""

from uuid import UUID

from marginalia.application.dto.search_dto import QuoteCandidate, QuoteResult
from marginalia.application.ports import EmbeddingProvider, QuoteExtractor
from marginalia.application.services.embedding_ranker import EmbeddingRanker, RankedChunk
from marginalia.domain.entities import Chunk
from marginalia.domain.exceptions import NotFound, ValidationError

SEMANTIC_TOP_K = 5


class DocumentSearchUseCase:
    """Rank a document's chunks against the query and let the quote extractor pick passages.

    Result relevance comes from the quote extractor, not from chunk similarity.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        embedding_provider: EmbeddingProvider,
        quote_extractor: QuoteExtractor,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._ranker = EmbeddingRanker(embedding_provider)
        self._quote_extractor = quote_extractor

    async def execute(self, document_id: UUID, query: str) -> list[QuoteResult]:
        """Search a standalone document; research context is the document's intent."""
        _require_query(query)
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound("Document", str(document_id))
            chunks = await uow.chunks.get_by_document_id(document_id)
        ranked = await self._rank(chunks, query)
        return await self._extract(query, document.user_intent or "", ranked)

    async def execute_for_project_document(
        self, project_document_id: UUID, query: str
    ) -> list[QuoteResult]:
        """Search a project document; research context is the project thesis, else the intent."""
        _require_query(query)
        async with self._uow_factory() as uow:
            project_document = await uow.projects.get_project_document(project_document_id)
            if not project_document:
                raise NotFound("Project document", str(project_document_id))
            document = await uow.documents.get_by_id(project_document.document_id)
            if not document:
                raise NotFound("Document", str(project_document.document_id))
            project = await uow.projects.get_project(project_document.project_id)
            chunks = await uow.chunks.get_by_document_id(document.id)
        ranked = await self._rank(chunks, query)

        context = (project.thesis if project else None) or document.user_intent or ""
        return await self._extract(query, context, ranked)

    async def _rank(self, chunks: list[Chunk], query: str) -> list[RankedChunk]:
        if not chunks:
            return []
        ranked = await self._ranker.rank(chunks, query, self._uow_factory)
        return ranked[:SEMANTIC_TOP_K]

    async def _extract(
        self, query: str, research_context: str, ranked: list[RankedChunk]
    ) -> list[QuoteResult]:
        if not ranked:
            return []
        return await self._quote_extractor.extract_quotes(
            query,
            research_context,
            [
                QuoteCandidate(
                    text=r.chunk.text,
                    start_position=r.chunk.start_position,
                    end_position=r.chunk.end_position,
                    similarity=r.similarity,
                )
                for r in ranked
            ],
        )


def _require_query(query: str) -> None:
    if not query or not query.strip():
        raise ValidationError("Query is required")
