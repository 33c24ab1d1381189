"""Project repository port - read side used by project search."""

from typing import Protocol
from uuid import UUID

from marginalia.domain.entities import (
    Folder,
    Project,
    ProjectAnnotation,
    ProjectDocument,
)


class ProjectRepository(Protocol):
    """Port for reading projects and their folders, documents and annotations."""

    async def get_project(self, project_id: UUID) -> Project | None: ...

    async def list_folders(self, project_id: UUID) -> list[Folder]: ...

    async def list_project_documents(self, project_id: UUID) -> list[ProjectDocument]: ...

    async def get_project_document(
        self, project_document_id: UUID
    ) -> ProjectDocument | None: ...

    async def list_project_annotations(
        self, project_id: UUID
    ) -> list[tuple[ProjectAnnotation, ProjectDocument]]: ...
