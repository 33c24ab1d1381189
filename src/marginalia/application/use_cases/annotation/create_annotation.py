"""Create annotation use case."""

from datetime import UTC, datetime
from uuid import uuid4

from marginalia.application.dto.annotation_dto import AnnotationCreateInput
from marginalia.domain.entities import Annotation
from marginalia.domain.exceptions import NotFound, ValidationError


class CreateAnnotationUseCase:
    """Create a manual annotation over a document span."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, input_data: AnnotationCreateInput) -> Annotation:
        if not input_data.highlighted_text or not input_data.note:
            raise ValidationError("Highlighted text and note are required")

        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(input_data.document_id)
            if not document:
                raise NotFound("Document", str(input_data.document_id))

            if not 0 <= input_data.start_position < input_data.end_position <= len(
                document.full_text
            ):
                raise ValidationError(
                    f"Span {input_data.start_position}..{input_data.end_position} "
                    f"is outside the document text"
                )

            annotation = Annotation(
                id=uuid4(),
                document_id=document.id,
                start_position=input_data.start_position,
                end_position=input_data.end_position,
                highlighted_text=input_data.highlighted_text,
                category=input_data.category,
                note=input_data.note,
                is_ai_generated=input_data.is_ai_generated,
                created_at=datetime.now(UTC),
            )
            return await uow.annotations.create(annotation)
