"""Document summarizer port."""

from typing import Protocol

from marginalia.application.dto.document_dto import DocumentSummary


class DocumentSummarizer(Protocol):
    """Port for summarizing a document's full text."""

    async def summarize(self, full_text: str) -> DocumentSummary: ...
