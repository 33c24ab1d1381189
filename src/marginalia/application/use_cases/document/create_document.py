"""Create document use case - validate text, chunk it and store document with chunks."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from marginalia.application.dto.chunking_config import ChunkingConfig
from marginalia.application.dto.document_dto import DocumentCreateInput, DocumentOutput
from marginalia.application.ports import Chunker
from marginalia.domain.entities import Chunk, Document
from marginalia.domain.exceptions import UnreadableDocument

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 10


class CreateDocumentUseCase:
    """Store extracted document text and its chunks in one transaction."""

    def __init__(
        self,
        unit_of_work_factory: type,
        chunker: Chunker,
        chunking_config: ChunkingConfig,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._chunker = chunker
        self._chunking_config = chunking_config

    async def execute(self, input_data: DocumentCreateInput) -> DocumentOutput:
        """Create document; chunks get no embeddings until the document is ranked."""
        content = input_data.content
        if not content or len(content.strip()) < MIN_TEXT_LENGTH:
            raise UnreadableDocument("Could not extract text from file")

        spans = self._chunker.chunk(content, self._chunking_config)
        document = Document(
            id=uuid4(),
            filename=input_data.filename,
            full_text=content,
            created_at=datetime.now(UTC),
            chunk_count=len(spans),
        )
        chunks = [
            Chunk(
                id=uuid4(),
                document_id=document.id,
                text=span.text,
                start_position=span.start_position,
                end_position=span.end_position,
            )
            for span in spans
        ]

        async with self._uow_factory() as uow:
            await uow.documents.create(document)
            await uow.chunks.create_batch(chunks)

        logger.info(
            "Ingested document %s (%s): %d chars, %d chunks",
            document.id,
            document.filename,
            len(content),
            len(chunks),
        )
        return DocumentOutput.from_entity(document)
