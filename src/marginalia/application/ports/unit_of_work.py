"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

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


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def chunks(self) -> ChunkRepository: ...

    @property
    def annotations(self) -> AnnotationRepository: ...

    @property
    def projects(self) -> ProjectRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
