"""Global search scorer - lexical scoring across project, folder, document and annotation sources.

Every source kind is a descriptor: which fields are matched, which text is
shown, which filters apply and which provenance fields the result carries.
One generic pass scores and tags items of any kind; results are pooled and
sorted by score.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from marginalia.application.dto.search_dto import GlobalSearchResult, SearchFilters
from marginalia.application.services.text_match import text_match_score
from marginalia.domain.entities import Folder, Project, ProjectAnnotation, ProjectDocument
from marginalia.domain.value_objects import RelevanceLevel, SearchResultType

T = TypeVar("T")

AnnotationRow = tuple[ProjectAnnotation, ProjectDocument]


@dataclass(frozen=True)
class SourceKind(Generic[T]):
    """How one kind of searchable entity is matched, filtered and tagged."""

    result_type: SearchResultType
    searchable: Callable[[T], Sequence[str | None]]
    display: Callable[[T], str]
    allowed: Callable[[T, SearchFilters], bool]
    provenance: Callable[[T], dict[str, Any]]


def _join(parts: Iterable[str | None]) -> str:
    return " ".join(p for p in parts if p)


def _first(*parts: str | None) -> str:
    return next((p for p in parts if p), "")


def _in_folders(folder_id, filters: SearchFilters) -> bool:
    # Items outside any folder are never excluded by the folder filter.
    return filters.folder_ids is None or folder_id is None or folder_id in filters.folder_ids


def _in_documents(document_id, filters: SearchFilters) -> bool:
    return filters.document_ids is None or document_id in filters.document_ids


def _document_provenance(doc: ProjectDocument) -> dict[str, Any]:
    return {
        "document_id": doc.id,
        "document_filename": doc.filename,
        "folder_id": doc.folder_id,
        "citation_data": doc.citation_data,
    }


PROJECT_SOURCE: SourceKind[Project] = SourceKind(
    result_type=SearchResultType.FOLDER_CONTEXT,
    searchable=lambda p: (p.context_summary, p.thesis, p.name),
    display=lambda p: _first(p.context_summary, p.thesis, p.name),
    allowed=lambda p, f: True,
    provenance=lambda p: {},
)

FOLDER_SOURCE: SourceKind[Folder] = SourceKind(
    result_type=SearchResultType.FOLDER_CONTEXT,
    searchable=lambda f: (f.context_summary, f.description, f.name),
    display=lambda f: _first(f.context_summary, f.description, f.name),
    allowed=lambda f, filters: filters.folder_ids is None or f.id in filters.folder_ids,
    provenance=lambda f: {"folder_id": f.id, "folder_name": f.name},
)

DOCUMENT_SOURCE: SourceKind[ProjectDocument] = SourceKind(
    result_type=SearchResultType.DOCUMENT_CONTEXT,
    searchable=lambda d: (d.retrieval_context, d.summary, d.filename),
    display=lambda d: _first(d.retrieval_context, d.summary, d.filename),
    allowed=lambda d, filters: _in_documents(d.id, filters) and _in_folders(d.folder_id, filters),
    provenance=_document_provenance,
)


def _annotation_allowed(row: AnnotationRow, filters: SearchFilters) -> bool:
    annotation, doc = row
    if filters.categories is not None and annotation.category not in filters.categories:
        return False
    return _in_documents(doc.id, filters) and _in_folders(doc.folder_id, filters)


def _annotation_provenance(row: AnnotationRow) -> dict[str, Any]:
    annotation, doc = row
    return {
        **_document_provenance(doc),
        "annotation_id": annotation.id,
        "highlighted_text": annotation.highlighted_text,
        "note": annotation.note or None,
        "category": annotation.category,
        "start_position": annotation.start_position,
    }


ANNOTATION_SOURCE: SourceKind[AnnotationRow] = SourceKind(
    result_type=SearchResultType.ANNOTATION,
    searchable=lambda r: (r[0].searchable_content, r[0].highlighted_text, r[0].note),
    display=lambda r: _first(r[0].searchable_content, r[0].highlighted_text),
    allowed=_annotation_allowed,
    provenance=_annotation_provenance,
)


def score_source(
    query: str,
    kind: SourceKind[T],
    items: Iterable[T],
    filters: SearchFilters,
) -> list[GlobalSearchResult]:
    """Score every allowed item of one kind; keep the ones with a non-zero score."""
    results: list[GlobalSearchResult] = []
    for item in items:
        if not kind.allowed(item, filters):
            continue
        score = text_match_score(query, _join(kind.searchable(item)))
        if score <= 0:
            continue
        results.append(
            GlobalSearchResult(
                type=kind.result_type,
                matched_text=kind.display(item),
                similarity_score=score,
                relevance_level=RelevanceLevel.from_score(score),
                **kind.provenance(item),
            )
        )
    return results


def score_project(
    query: str,
    project: Project,
    folders: Iterable[Folder],
    documents: Iterable[ProjectDocument],
    annotations: Iterable[AnnotationRow],
    filters: SearchFilters | None = None,
) -> list[GlobalSearchResult]:
    """Score all four sources of a project and return hits sorted by descending score."""
    filters = filters or SearchFilters()
    # The project itself is only searchable once it has descriptive context.
    project_items = [project] if (project.context_summary or project.thesis) else []
    results = [
        *score_source(query, PROJECT_SOURCE, project_items, filters),
        *score_source(query, FOLDER_SOURCE, folders, filters),
        *score_source(query, DOCUMENT_SOURCE, documents, filters),
        *score_source(query, ANNOTATION_SOURCE, annotations, filters),
    ]
    results.sort(key=lambda r: r.similarity_score, reverse=True)
    return results
