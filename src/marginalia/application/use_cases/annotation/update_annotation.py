"""Update annotation use case."""

from uuid import UUID

from marginalia.domain.entities import Annotation
from marginalia.domain.exceptions import NotFound, ValidationError
from marginalia.domain.value_objects import AnnotationCategory


class UpdateAnnotationUseCase:
    """Change an annotation's note and category."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, annotation_id: UUID, note: str, category: AnnotationCategory
    ) -> Annotation:
        if not note:
            raise ValidationError("Note and category are required")

        async with self._uow_factory() as uow:
            annotation = await uow.annotations.get_by_id(annotation_id)
            if not annotation:
                raise NotFound("Annotation", str(annotation_id))
            annotation.note = note
            annotation.category = category
            return await uow.annotations.update(annotation)
