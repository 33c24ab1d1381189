"""Quote extractor port - finds quotable passages for a query."""

from typing import Protocol

from marginalia.application.dto.search_dto import QuoteCandidate, QuoteResult


class QuoteExtractor(Protocol):
    """Port for LLM-backed quote extraction over ranked chunks."""

    async def extract_quotes(
        self,
        query: str,
        research_context: str,
        candidates: list[QuoteCandidate],
    ) -> list[QuoteResult]: ...
