"""Summarize document use case."""

from uuid import UUID

from marginalia.application.dto.document_dto import DocumentOutput
from marginalia.application.ports import DocumentSummarizer
from marginalia.domain.exceptions import NotFound


class SummarizeDocumentUseCase:
    """Generate and store a document's summary, main arguments and key concepts."""

    def __init__(
        self,
        unit_of_work_factory: type,
        summarizer: DocumentSummarizer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._summarizer = summarizer

    async def execute(self, document_id: UUID) -> DocumentOutput:
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
        if not document:
            raise NotFound("Document", str(document_id))

        summary = await self._summarizer.summarize(document.full_text)

        async with self._uow_factory() as uow:
            document.summary = summary.summary
            document.main_arguments = summary.main_arguments
            document.key_concepts = summary.key_concepts
            await uow.documents.update(document)
        return DocumentOutput.from_entity(document)
