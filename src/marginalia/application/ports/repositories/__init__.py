"""Repository ports."""

from marginalia.application.ports.repositories.annotation_repository import (
    AnnotationRepository,
)
from marginalia.application.ports.repositories.chunk_repository import ChunkRepository
from marginalia.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from marginalia.application.ports.repositories.project_repository import (
    ProjectRepository,
)

__all__ = [
    "AnnotationRepository",
    "ChunkRepository",
    "DocumentRepository",
    "ProjectRepository",
]
