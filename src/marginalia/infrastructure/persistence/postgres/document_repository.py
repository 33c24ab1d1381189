"""PostgreSQL document repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from marginalia.domain.entities import Document

_COLUMNS = (
    "id, filename, full_text, chunk_count, user_intent, summary, "
    "main_arguments, key_concepts, created_at"
)


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        filename=r[1],
        full_text=r[2],
        chunk_count=r[3],
        user_intent=r[4],
        summary=r[5],
        main_arguments=list(r[6] or []),
        key_concepts=list(r[7] or []),
        created_at=r[8],
    )


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE id = %s", (document_id,)
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list(self) -> list[Document]:
        """List documents, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document ORDER BY created_at DESC"
        )
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def create(self, document: Document) -> Document:
        """Create document."""
        await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                document.id,
                document.filename,
                document.full_text,
                document.chunk_count,
                document.user_intent,
                document.summary,
                Jsonb(document.main_arguments),
                Jsonb(document.key_concepts),
                document.created_at,
            ),
        )
        return document

    async def update(self, document: Document) -> Document:
        """Update mutable document fields."""
        await self._conn.execute(
            "UPDATE document SET chunk_count=%s, user_intent=%s, summary=%s, "
            "main_arguments=%s, key_concepts=%s WHERE id=%s",
            (
                document.chunk_count,
                document.user_intent,
                document.summary,
                Jsonb(document.main_arguments),
                Jsonb(document.key_concepts),
                document.id,
            ),
        )
        return document
