"""List annotations use case."""

from uuid import UUID

from marginalia.domain.entities import Annotation
from marginalia.domain.exceptions import NotFound


class ListAnnotationsUseCase:
    """List a document's annotations in text order."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> list[Annotation]:
        async with self._uow_factory() as uow:
            if not await uow.documents.get_by_id(document_id):
                raise NotFound("Document", str(document_id))
            return await uow.annotations.list_by_document(document_id)
