"""Project entities - research projects grouping folders, documents and annotations."""

from dataclasses import dataclass
from uuid import UUID

from marginalia.domain.value_objects import AnnotationCategory


@dataclass
class Project:
    """Research project with an optional thesis and context summary."""

    id: UUID
    name: str
    thesis: str | None = None
    context_summary: str | None = None


@dataclass
class Folder:
    """Folder inside a project."""

    id: UUID
    project_id: UUID
    name: str
    description: str | None = None
    context_summary: str | None = None


@dataclass
class ProjectDocument:
    """Document linked into a project, joined with the underlying document fields."""

    id: UUID
    project_id: UUID
    document_id: UUID
    filename: str
    folder_id: UUID | None = None
    retrieval_context: str | None = None
    summary: str | None = None
    citation_data: dict | None = None


@dataclass
class ProjectAnnotation:
    """Annotation stored against a project document."""

    id: UUID
    project_document_id: UUID
    start_position: int
    end_position: int
    highlighted_text: str
    category: AnnotationCategory
    note: str | None = None
    searchable_content: str | None = None
