"""PostgreSQL chunk repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from marginalia.domain.entities import Chunk


class PostgresChunkRepository:
    """Chunk repository with lazily stored pgvector embeddings."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        """Create chunks in batch."""
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO chunk (id, document_id, text, start_position, end_position) "
                "VALUES (%s, %s, %s, %s, %s)",
                [
                    (c.id, c.document_id, c.text, c.start_position, c.end_position)
                    for c in chunks
                ],
            )
        return chunks

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]:
        """Get chunks of a document in text order."""
        cur = await self._conn.execute(
            "SELECT id, document_id, text, start_position, end_position, embedding "
            "FROM chunk WHERE document_id = %s ORDER BY start_position",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [
            Chunk(
                id=r[0],
                document_id=r[1],
                text=r[2],
                start_position=r[3],
                end_position=r[4],
                embedding=[float(x) for x in r[5]] if r[5] is not None else None,
            )
            for r in rows
        ]

    async def update_embedding(self, chunk_id: UUID, embedding: list[float]) -> None:
        """Store a chunk's embedding. Writing the same vector again is harmless."""
        await self._conn.execute(
            "UPDATE chunk SET embedding = %s::vector WHERE id = %s",
            (embedding, chunk_id),
        )
