"""PostgreSQL annotation repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from marginalia.domain.entities import Annotation
from marginalia.domain.value_objects import AnnotationCategory

_COLUMNS = (
    "id, document_id, start_position, end_position, highlighted_text, category, "
    "note, is_ai_generated, confidence_score, created_at"
)


def _row_to_annotation(r: tuple) -> Annotation:
    return Annotation(
        id=r[0],
        document_id=r[1],
        start_position=r[2],
        end_position=r[3],
        highlighted_text=r[4],
        category=AnnotationCategory(r[5]),
        note=r[6],
        is_ai_generated=r[7],
        confidence_score=r[8],
        created_at=r[9],
    )


class PostgresAnnotationRepository:
    """Annotation repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, annotation_id: UUID) -> Annotation | None:
        """Get annotation by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM annotation WHERE id = %s", (annotation_id,)
        )
        r = await cur.fetchone()
        return _row_to_annotation(r) if r else None

    async def list_by_document(self, document_id: UUID) -> list[Annotation]:
        """List a document's annotations in text order."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM annotation WHERE document_id = %s "
            "ORDER BY start_position, created_at",
            (document_id,),
        )
        return [_row_to_annotation(r) for r in await cur.fetchall()]

    async def create(self, annotation: Annotation) -> Annotation:
        """Create annotation."""
        await self._conn.execute(
            f"INSERT INTO annotation ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                annotation.id,
                annotation.document_id,
                annotation.start_position,
                annotation.end_position,
                annotation.highlighted_text,
                annotation.category.value,
                annotation.note,
                annotation.is_ai_generated,
                annotation.confidence_score,
                annotation.created_at,
            ),
        )
        return annotation

    async def update(self, annotation: Annotation) -> Annotation:
        """Update note and category."""
        await self._conn.execute(
            "UPDATE annotation SET note=%s, category=%s WHERE id=%s",
            (annotation.note, annotation.category.value, annotation.id),
        )
        return annotation

    async def delete(self, annotation_id: UUID) -> None:
        """Delete annotation."""
        await self._conn.execute("DELETE FROM annotation WHERE id = %s", (annotation_id,))
