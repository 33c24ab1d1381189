"""Delete annotation use case."""

from uuid import UUID

from marginalia.domain.exceptions import NotFound


class DeleteAnnotationUseCase:
    """Delete a single annotation."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, annotation_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if not await uow.annotations.get_by_id(annotation_id):
                raise NotFound("Annotation", str(annotation_id))
            await uow.annotations.delete(annotation_id)
