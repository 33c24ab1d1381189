"""Request parsing helpers and response serializers shared by API resources."""

from typing import Any
from uuid import UUID

import falcon.asgi

from marginalia.application.dto.document_dto import DocumentOutput
from marginalia.application.dto.search_dto import (
    GlobalSearchResponse,
    GlobalSearchResult,
    QuoteResult,
    SearchFilters,
)
from marginalia.domain.entities import Annotation
from marginalia.domain.exceptions import ValidationError
from marginalia.domain.value_objects import AnnotationCategory


def parse_uuid(value: str, what: str = "id") -> UUID:
    """Parse a path parameter; malformed ids are a validation error."""
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {what}") from None


async def read_json(req: falcon.asgi.Request) -> dict[str, Any]:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def parse_category(value: Any) -> AnnotationCategory:
    try:
        return AnnotationCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in AnnotationCategory)
        raise ValidationError(f"Unknown category {value!r}; expected one of: {allowed}") from None


def _uuid_list(value: Any, field: str) -> list[UUID] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError(f"filters.{field} must be a list")
    return [parse_uuid(str(v), field) for v in value]


def parse_filters(raw: Any) -> SearchFilters:
    """Parse `{categories, folderIds, documentIds}`; missing keys mean no restriction."""
    if raw is None:
        return SearchFilters()
    if not isinstance(raw, dict):
        raise ValidationError("filters must be an object")
    categories = raw.get("categories")
    if categories is not None:
        if not isinstance(categories, list):
            raise ValidationError("filters.categories must be a list")
        categories = [parse_category(c) for c in categories]
    return SearchFilters(
        categories=categories,
        folder_ids=_uuid_list(raw.get("folderIds"), "folderIds"),
        document_ids=_uuid_list(raw.get("documentIds"), "documentIds"),
    )


def document_to_dict(d: DocumentOutput, include_text: bool = True) -> dict:
    data = {
        "id": str(d.id),
        "filename": d.filename,
        "chunkCount": d.chunk_count,
        "userIntent": d.user_intent,
        "summary": d.summary,
        "mainArguments": d.main_arguments,
        "keyConcepts": d.key_concepts,
        "createdAt": d.created_at.isoformat(),
    }
    if include_text:
        data["fullText"] = d.full_text
    return data


def summary_to_dict(d: DocumentOutput) -> dict:
    return {
        "summary": d.summary,
        "mainArguments": d.main_arguments,
        "keyConcepts": d.key_concepts,
    }


def annotation_to_dict(a: Annotation) -> dict:
    return {
        "id": str(a.id),
        "documentId": str(a.document_id),
        "startPosition": a.start_position,
        "endPosition": a.end_position,
        "highlightedText": a.highlighted_text,
        "category": a.category.value,
        "note": a.note,
        "isAiGenerated": a.is_ai_generated,
        "confidenceScore": a.confidence_score,
        "createdAt": a.created_at.isoformat(),
    }


def quote_to_dict(q: QuoteResult) -> dict:
    return {
        "quote": q.quote,
        "explanation": q.explanation,
        "relevance": q.relevance.value,
        "startPosition": q.start_position,
        "endPosition": q.end_position,
    }


def _str_or_none(value: Any) -> str | None:
    return str(value) if value is not None else None


def global_result_to_dict(r: GlobalSearchResult) -> dict:
    data = {
        "type": r.type.value,
        "matchedText": r.matched_text,
        "similarityScore": round(r.similarity_score, 6),
        "relevanceLevel": r.relevance_level.value,
        "folderId": _str_or_none(r.folder_id),
        "folderName": r.folder_name,
        "documentId": _str_or_none(r.document_id),
        "documentFilename": r.document_filename,
        "annotationId": _str_or_none(r.annotation_id),
        "highlightedText": r.highlighted_text,
        "note": r.note,
        "category": r.category.value if r.category else None,
        "startPosition": r.start_position,
        "citationData": r.citation_data,
    }
    # Variant fields that do not apply are left out.
    return {k: v for k, v in data.items() if v is not None}


def global_response_to_dict(response: GlobalSearchResponse) -> dict:
    return {
        "results": [global_result_to_dict(r) for r in response.results],
        "totalResults": response.total_results,
        "searchTime": response.search_time,
    }
