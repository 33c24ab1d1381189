"""Search DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from marginalia.domain.value_objects import (
    AnnotationCategory,
    RelevanceLevel,
    SearchResultType,
)


@dataclass
class SearchFilters:
    """Optional allow-lists for global search. None means no restriction."""

    categories: list[AnnotationCategory] | None = None
    folder_ids: list[UUID] | None = None
    document_ids: list[UUID] | None = None


@dataclass
class GlobalSearchResult:
    """One global search hit. Variant fields are None outside their variant."""

    type: SearchResultType
    matched_text: str
    similarity_score: float
    relevance_level: RelevanceLevel
    folder_id: UUID | None = None
    folder_name: str | None = None
    document_id: UUID | None = None
    document_filename: str | None = None
    annotation_id: UUID | None = None
    highlighted_text: str | None = None
    note: str | None = None
    category: AnnotationCategory | None = None
    start_position: int | None = None
    citation_data: dict | None = None


@dataclass
class GlobalSearchResponse:
    """Truncated results plus pre-truncation count and elapsed milliseconds."""

    results: list[GlobalSearchResult] = field(default_factory=list)
    total_results: int = 0
    search_time: int = 0


@dataclass
class QuoteCandidate:
    """Chunk passed to quote extraction."""

    text: str
    start_position: int
    end_position: int
    similarity: float


@dataclass
class QuoteResult:
    """Quote found by the quote extractor. Relevance is the extractor's own judgment."""

    quote: str
    explanation: str
    relevance: RelevanceLevel
    start_position: int
    end_position: int
