"""Annotation repository port."""

from typing import Protocol
from uuid import UUID

from marginalia.domain.entities import Annotation


class AnnotationRepository(Protocol):
    """Port for annotation persistence."""

    async def get_by_id(self, annotation_id: UUID) -> Annotation | None: ...

    async def list_by_document(self, document_id: UUID) -> list[Annotation]: ...

    async def create(self, annotation: Annotation) -> Annotation: ...

    async def update(self, annotation: Annotation) -> Annotation: ...

    async def delete(self, annotation_id: UUID) -> None: ...
