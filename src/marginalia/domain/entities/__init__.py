"""Domain entities."""

from marginalia.domain.entities.annotation import Annotation
from marginalia.domain.entities.chunk import Chunk
from marginalia.domain.entities.document import Document
from marginalia.domain.entities.project import (
    Folder,
    Project,
    ProjectAnnotation,
    ProjectDocument,
)

__all__ = [
    "Annotation",
    "Chunk",
    "Document",
    "Folder",
    "Project",
    "ProjectAnnotation",
    "ProjectDocument",
]
